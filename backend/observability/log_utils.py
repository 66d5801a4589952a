"""
Logging utilities for safe structured logging.

Helpers that turn arbitrary context values (records, lists, amounts) into
short strings before they reach the log `extra` dict.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any
from uuid import UUID


def safe_log_value(value: Any, max_length: int = 200) -> str:
    """
    Convert a context value to a bounded string for logging.

    Collections are summarised by size; UUIDs and numbers are rendered
    directly; long strings are truncated.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    if value is None:
        return "None"
    if isinstance(value, (UUID, int, float, bool)):
        return str(value)
    if isinstance(value, (list, tuple, set)):
        return f"{type(value).__name__}({len(value)} items)"
    if isinstance(value, dict):
        return f"dict({len(value)} keys: {', '.join(sorted(map(str, value))[:10])})"

    text = value if isinstance(value, str) else repr(value)
    if len(text) > max_length:
        return text[:max_length] + f"... (truncated, {len(text)} total)"
    return text


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with structured context, safely converting all values.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Arbitrary key-value pairs
    """
    logger.log(level, message, extra={key: safe_log_value(val) for key, val in context.items()})


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context,
) -> None:
    """
    Log an exception with traceback and context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional context
    """
    safe_context = {key: safe_log_value(val) for key, val in context.items()}
    safe_context.update({"error_type": type(exc).__name__, "error_msg": str(exc)})
    logger.exception(message, extra=safe_context)
