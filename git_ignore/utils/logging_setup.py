"""
Logging configuration for git-ignore.

Provides environment-aware logging that:
- Writes to stderr so command output on stdout stays clean
- Outputs JSON when GIT_IGNORE_LOG_FORMAT=json
- Includes custom TRACE level for per-rule decisions
"""

import sys
import logging
import json
import os
from datetime import datetime, timezone
from typing import Optional, Any

from git_ignore.constants import (
    LOG_LEVEL_ENV,
    FALLBACK_LOG_LEVEL_ENV,
    LOG_FORMAT_ENV,
    DEFAULT_LOG_LEVEL,
)

# Define TRACE level (lower number = more detailed)
TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")


def trace(self, message, *args, **kwargs):
    if self.isEnabledFor(TRACE_LEVEL):
        self._log(TRACE_LEVEL, message, args, **kwargs)


logging.Logger.trace = trace


def add_trace_to_logger():
    """Ensure trace method is available on all logger instances"""
    if not hasattr(logging.Logger, 'trace'):
        logging.Logger.trace = trace


class JsonFormatter(logging.Formatter):
    """One JSON object per log record"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'component': record.name,
            'message': record.getMessage(),
        }

        # Add any extra fields
        if hasattr(record, 'extra'):
            log_data.update(record.extra)

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def resolve_log_level(log_level: Optional[str] = None) -> int:
    """
    Turn a level name into a numeric level.

    Args:
        log_level: Explicit level name; falls back to the environment

    Returns:
        Numeric logging level, TRACE included
    """
    level_str = (
        log_level
        or os.environ.get(LOG_LEVEL_ENV)
        or os.environ.get(FALLBACK_LOG_LEVEL_ENV)
        or DEFAULT_LOG_LEVEL
    )
    if level_str.upper() == 'TRACE':
        return TRACE_LEVEL
    return getattr(logging, level_str.upper(), logging.WARNING)


def configure_logging(
    log_level: Optional[str] = None,
    json_format: Optional[bool] = None,
) -> None:
    """
    Configure the root logger with a single stderr handler.

    Args:
        log_level: Override log level (defaults to GIT_IGNORE_LOG_LEVEL, then
            LOG_LEVEL, then WARNING)
        json_format: Force JSON output on or off (defaults to
            GIT_IGNORE_LOG_FORMAT=json)
    """
    add_trace_to_logger()
    level = resolve_log_level(log_level)

    if json_format is None:
        json_format = os.environ.get(LOG_FORMAT_ENV, '').lower() == 'json'

    root_logger = logging.getLogger()
    root_logger.handlers = []

    handler = logging.StreamHandler(sys.stderr)
    if json_format:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))

    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    logging.getLogger('git_ignore').debug(
        f"Logging configured - Level: {logging.getLevelName(level)}, JSON: {json_format}"
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance with the trace method available
    """
    add_trace_to_logger()
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any
) -> None:
    """
    Log a message with additional context fields.

    Args:
        logger: Logger instance
        level: Log level (e.g., logging.INFO)
        message: Log message
        **context: Additional fields to include in structured logs
    """
    extra = {'extra': context} if context else {}
    logger.log(level, message, extra=extra)
