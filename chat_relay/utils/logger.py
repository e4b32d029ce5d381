"""Logging utility functions."""

import logging
import json
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from chat_relay.config import get_settings

_PLAIN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Attributes every LogRecord carries; anything else came in through `extra`
_RECORD_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging"""
    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON"""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS and not key.startswith("_"):
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_data["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(log_data, default=str)


# Dictionary to keep track of loggers that have been configured
_configured_loggers = {}


def get_logger(name: str) -> logging.Logger:
    """Get configured logger instance.

    Returns a logger with consistent configuration. Ensures that
    each named logger is only configured once to prevent duplicate handlers.
    """
    logger = logging.getLogger(name)

    if name not in _configured_loggers:
        settings = get_settings()

        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

        handler = logging.StreamHandler(sys.stderr)
        if settings.LOG_JSON:
            handler.setFormatter(JSONFormatter())
        else:
            handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))
        logger.addHandler(handler)

        logger.setLevel(settings.LOG_LEVEL)

        # The Lambda runtime installs its own root handler
        logger.propagate = False

        _configured_loggers[name] = True

    return logger


class LoggerAdapter(logging.LoggerAdapter):
    """Custom logger adapter for adding context to logs"""
    def __init__(self, logger: logging.Logger, extra: Optional[Dict[str, Any]] = None):
        """Initialize adapter with logger and extra context"""
        super().__init__(logger, extra or {})

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        """Process log message and add extra context"""
        kwargs.setdefault("extra", {})
        kwargs["extra"].update(self.extra)
        return msg, kwargs


def get_request_logger(
    logger: logging.Logger,
    request_id: Optional[str],
    connection_id: Optional[str] = None
) -> LoggerAdapter:
    """Get a logger adapter carrying the Lambda request and connection ids."""
    return LoggerAdapter(
        logger,
        {'request_id': request_id, 'connection_id': connection_id}
    )
