import re
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from core import constants
from core.exceptions import ConfigurationException
from models.credentials import TelegramCredentials

CHAT_ID_PATTERN = re.compile(r"^[+-]?\d+$")


class Settings(BaseSettings):
    # --- Store ---
    STORE_PATH: str = Field(
        constants.DEFAULT_STORE_PATH, description="Path to the fingerprint JSON file"
    )

    # --- Telegram (Optional) ---
    # Single "token,chatID" string, empty disables notifications
    TELEGRAM: str = Field("", description="Telegram bot token and chat ID")
    NOTIFY_RETRIES: int = Field(
        constants.DEFAULT_NOTIFY_RETRIES, ge=1, description="Attempts per notification"
    )

    # --- Logging ---
    LOG_LEVEL: str = Field(constants.DEFAULT_LOG_LEVEL, description="Logging level")
    LOG_FILE: str = Field(constants.DEFAULT_LOG_FILE, description="Log file path")
    LOG_FORMAT: str = Field(constants.DEFAULT_LOG_FORMAT, description="Log format (text/json)")
    LOG_MAX_BYTES: int = Field(constants.DEFAULT_LOG_MAX_BYTES, description="Max log file size")
    LOG_BACKUP_COUNT: int = Field(constants.DEFAULT_LOG_BACKUP_COUNT, description="Log backup count")
    LOG_TIMEZONE: str = Field(constants.DEFAULT_LOG_TIMEZONE, description="Timezone for log timestamps")

    # --- Fetcher ---
    FETCH_TIMEOUT: float = Field(constants.DEFAULT_FETCH_TIMEOUT, gt=0, description="Request timeout in seconds")
    CONNECT_TIMEOUT: float = Field(constants.DEFAULT_CONNECT_TIMEOUT, gt=0, description="Connect timeout in seconds")
    USER_AGENT: str = Field(constants.DEFAULT_USER_AGENT)
    CACHE_BUST_PARAM: str = Field(
        constants.DEFAULT_CACHE_BUST_PARAM, min_length=1, description="Query parameter used to defeat caches"
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            v = v.strip().upper()
            if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
                raise ValueError(f"LOG_LEVEL must be a standard logging level, got {v!r}")
        return v

    @field_validator("LOG_FORMAT", mode="before")
    @classmethod
    def normalize_log_format(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            if v not in ("text", "json"):
                raise ValueError(f"LOG_FORMAT must be 'text' or 'json', got {v!r}")
        return v

    @field_validator("TELEGRAM", mode="before")
    @classmethod
    def strip_telegram(cls, v):
        # Handle accidental surrounding quotes from .env files
        if isinstance(v, str):
            v = v.strip().strip("'").strip('"')
        return v

    class Config:
        env_prefix = "DOCWATCH_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


def parse_telegram_credentials(value: Optional[str]) -> Optional[TelegramCredentials]:
    """
    Parses a "token,chatID" string.

    Returns None when the value is empty (notifications disabled).
    Raises ConfigurationException for any other malformed input.
    """
    if not value:
        return None

    parts = value.split(",")
    if len(parts) != 2:
        raise ConfigurationException(
            "Expected telegram format 'token,chatID'",
            {"segments": len(parts)},
        )

    token, chat_id = parts[0].strip(), parts[1].strip()
    if not token:
        raise ConfigurationException("Telegram bot token is empty")
    if not CHAT_ID_PATTERN.match(chat_id):
        raise ConfigurationException("Invalid telegram chat ID", {"chat_id": chat_id})

    return TelegramCredentials(token=token, chat_id=int(chat_id))


def resolve_store_path(path: Optional[str]) -> Path:
    """
    Expands a leading "~" to the current user's home directory.
    Any other path (including "~user" forms) is used verbatim.
    """
    if not path:
        path = constants.DEFAULT_STORE_PATH

    if path == "~" or path.startswith("~/"):
        return Path(str(Path.home()) + path[1:])
    return Path(path)


settings = Settings()
