import json
import logging
import re
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import pytz

from core.config import settings

ROOT_LOGGER_NAME = "docwatch"


class SensitiveDataFilter(logging.Filter):
    """Filter to mask sensitive data in logs"""

    PATTERNS = [
        (r"(DOCWATCH_TELEGRAM=|bot)[0-9]{6,}:[A-Za-z0-9_-]{30,}", r"\1***MASKED***"),
        (r"\b[0-9]{6,}:[A-Za-z0-9_-]{30,}", r"***MASKED***"),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = self._mask_sensitive(record.msg)

        if record.args:
            new_args = []
            for arg in record.args:
                if isinstance(arg, str):
                    new_args.append(self._mask_sensitive(arg))
                else:
                    new_args.append(arg)
            record.args = tuple(new_args)
        return True

    def _mask_sensitive(self, text: str) -> str:
        for pattern, replacement in self.PATTERNS:
            text = re.sub(pattern, replacement, text)
        return text


class TimezoneFormatter(logging.Formatter):
    """Formatter that renders timestamps in a configured timezone, with structured context"""

    def __init__(self, fmt=None, datefmt=None, tz_name: str = "UTC"):
        super().__init__(fmt, datefmt)
        try:
            self.tz = pytz.timezone(tz_name)
        except pytz.UnknownTimeZoneError:
            self.tz = pytz.utc

    def formatTime(self, record, datefmt=None):
        dt = datetime.fromtimestamp(record.created, tz=pytz.utc).astimezone(self.tz)
        if datefmt:
            return dt.strftime(datefmt)
        return dt.isoformat(timespec="milliseconds")

    def format(self, record):
        base_msg = super().format(record)

        if getattr(record, "context", None):
            context_str = " | ".join(f"{k}={v}" for k, v in record.context.items())
            base_msg = f"{base_msg} | {context_str}"

        if hasattr(record, "duration_ms"):
            base_msg = f"{base_msg} | {record.duration_ms:.2f}ms"

        return base_msg


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def __init__(self, tz_name: str = "UTC"):
        super().__init__()
        try:
            self.tz = pytz.timezone(tz_name)
        except pytz.UnknownTimeZoneError:
            self.tz = pytz.utc

    def format(self, record):
        log_record = {
            "timestamp": datetime.fromtimestamp(record.created, tz=pytz.utc)
            .astimezone(self.tz)
            .isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
        }

        if getattr(record, "context", None):
            log_record["context"] = record.context
        if hasattr(record, "duration_ms"):
            log_record["duration_ms"] = record.duration_ms
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record, ensure_ascii=False, default=str)


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """Adapter to add structured context to log messages"""

    def process(self, msg, kwargs):
        context = kwargs.pop("context", {})

        if "extra" not in kwargs:
            kwargs["extra"] = {}
        kwargs["extra"]["context"] = context

        if "duration_ms" in kwargs:
            kwargs["extra"]["duration_ms"] = kwargs.pop("duration_ms")

        return msg, kwargs


def get_logger(name: str) -> StructuredLoggerAdapter:
    """
    Get a module logger. All module loggers hang under the "docwatch" logger,
    which setup_logging() configures once per process.
    """
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return StructuredLoggerAdapter(logging.getLogger(name), {})


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
) -> logging.Logger:
    """
    Configure console and (optional) rotating file handlers.

    Args:
        log_level: Level for the console handler, defaults to settings.LOG_LEVEL
        log_file: Path to log file, defaults to settings.LOG_FILE (empty disables it)
        log_format: "text" or "json" for the file handler
    """
    log_level = (log_level or settings.LOG_LEVEL).upper()
    log_file = settings.LOG_FILE if log_file is None else log_file
    log_format = (log_format or settings.LOG_FORMAT).lower()

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    level = getattr(logging, log_level, logging.INFO)
    logger.setLevel(logging.DEBUG if log_file else level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        TimezoneFormatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            tz_name=settings.LOG_TIMEZONE,
        )
    )
    console_handler.addFilter(SensitiveDataFilter())
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=settings.LOG_MAX_BYTES,
            backupCount=settings.LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)  # File gets all levels
        if log_format == "json":
            file_handler.setFormatter(JSONFormatter(tz_name=settings.LOG_TIMEZONE))
        else:
            file_handler.setFormatter(
                TimezoneFormatter(
                    "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                    tz_name=settings.LOG_TIMEZONE,
                )
            )
        file_handler.addFilter(SensitiveDataFilter())
        logger.addHandler(file_handler)

    # Prevent propagation to root logger to avoid duplicate logs
    logger.propagate = False
    return logger
