"""
Custom exception hierarchy for doc-watcher.
Fatal errors (configuration, store) abort a run; target errors are recovered per target.
"""


class WatcherException(Exception):
    """Base exception for all watcher errors."""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(WatcherException):
    """Exception for invalid configuration (e.g. a malformed telegram spec)."""

    pass


# =============================================================================
# Store Exceptions
# =============================================================================


class StoreException(WatcherException):
    """Base exception for fingerprint store errors. Always fatal."""

    pass


class StoreUnreadableException(StoreException):
    """The store file is missing or cannot be opened."""

    pass


class StoreCorruptException(StoreException):
    """The store file is not a JSON object of string values."""

    pass


class PersistFailedException(StoreException):
    """Writing the store back to disk failed."""

    pass


# =============================================================================
# Target Exceptions
# =============================================================================


class TargetException(WatcherException):
    """Base exception for per-target errors. Recovered, never abort the run."""

    pass


class MalformedKeyException(TargetException):
    """Store key does not decode into address and extraction rule."""

    pass


class FetchFailedException(TargetException):
    """Transport error, timeout or non-success HTTP status."""

    pass


class ParseFailedException(TargetException):
    """Document could not be parsed or the extraction rule is invalid."""

    pass


# =============================================================================
# Notification Exceptions
# =============================================================================


class NotificationException(WatcherException):
    """Base exception for notification delivery errors."""

    pass


class TelegramAPIException(NotificationException):
    """Exception for Telegram API errors."""

    pass
