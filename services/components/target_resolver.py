"""
TargetResolver component: decodes store keys into targets.
"""
from core import constants
from core.exceptions import MalformedKeyException
from models.target import Target


class TargetResolver:
    """
    Store keys have the form "<address>\\n\\n###\\n\\n<extraction rule>".
    """

    delimiter = constants.KEY_DELIMITER

    @classmethod
    def resolve(cls, key: str) -> Target:
        """
        Raises:
            MalformedKeyException: key does not split into exactly two non-empty parts
        """
        parts = key.split(cls.delimiter)
        if len(parts) != 2:
            raise MalformedKeyException(
                "Key format is incorrect, expecting 'url\\n\\n###\\n\\nselector'",
                {"key": repr(key), "segments": len(parts)},
            )

        address, rule = parts
        if not address.strip() or not rule.strip():
            raise MalformedKeyException(
                "Key has an empty address or selector",
                {"key": repr(key)},
            )

        return Target(key=key, address=address, extraction_rule=rule)

    @classmethod
    def encode(cls, address: str, rule: str) -> str:
        return f"{address}{cls.delimiter}{rule}"
