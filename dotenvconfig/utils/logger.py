"""
Logging Utilities
=================

Explicit logger construction for the configuration loaders. Nothing here
touches the root logger; callers hand the returned logger to the loader
they build.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

LOGGER_NAME = "dotenvconfig"
LOG_FORMATS = ("text", "json")

TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Marks handlers added by setup_logging so later calls leave the rest alone
_OWNED_ATTR = "_dotenvconfig_owned"


def _owned(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _OWNED_ATTR, True)
    return handler


class JsonFormatter(logging.Formatter):
    """Formats each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logging(
    enabled: bool = False,
    log_format: str = "text",
    log_level: str = "INFO",
    name: str = LOGGER_NAME,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Build the logger used by the loaders.

    Args:
        enabled: When False the logger gets a NullHandler and does not propagate.
            Use a dedicated name for that, such as the one null_logger picks.
        log_format: 'text' or 'json'
        log_level: Logging level name
        name: Logger name
        stream: Output stream (defaults to stderr)

    Returns:
        Configured logger
    """
    if log_format not in LOG_FORMATS:
        raise ValueError(f"Invalid log format: {log_format}. Must be one of {LOG_FORMATS}")

    logger = logging.getLogger(name)

    # Clear handlers from earlier calls; handlers attached by the application stay
    for handler in logger.handlers[:]:
        if getattr(handler, _OWNED_ATTR, False):
            logger.removeHandler(handler)

    if not enabled:
        logger.addHandler(_owned(logging.NullHandler()))
        logger.propagate = False
        return logger

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logger.setLevel(numeric_level)

    if log_format == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(formatter)
    logger.addHandler(_owned(handler))

    return logger


def null_logger(name: str = LOGGER_NAME + ".null") -> logging.Logger:
    """Return a logger that discards everything."""
    return setup_logging(enabled=False, name=name)
