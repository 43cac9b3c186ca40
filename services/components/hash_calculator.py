"""
HashCalculator component for content fingerprints.
"""
import hashlib


class HashCalculator:
    """
    Calculates content fingerprints to detect changes.
    Uses SHA-256 over the UTF-8 bytes, no normalization.
    """

    @staticmethod
    def calculate_hash(content: str) -> str:
        """
        Args:
            content: Extracted content block

        Returns:
            Lowercase hex SHA-256 digest (64 chars)
        """
        return hashlib.sha256(content.encode("utf-8")).hexdigest()
