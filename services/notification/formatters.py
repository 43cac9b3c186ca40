"""
Message formatting utilities for notifications.
"""
from core import constants
from models.run import TargetOutcome
from models.target import Target


def truncate_message(text: str, limit: int = constants.TELEGRAM_MAX_MESSAGE_LENGTH) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def create_change_message(target: Target, outcome: TargetOutcome = TargetOutcome.CHANGED) -> str:
    """
    Human-readable change notice naming the target's address.
    First observations are reported the same way as content drift.
    """
    msg = f"Content changed for URL: {target.address}"
    if outcome == TargetOutcome.FIRST_OBSERVATION:
        msg += "\n(first observation, no previous fingerprint)"
    msg += f"\nSelector: {target.extraction_rule}"
    return truncate_message(msg)
