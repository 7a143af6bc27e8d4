"""
Logging utilities for safe structured logging.

Helpers that turn arbitrary context values (messages, lists, models) into
short strings before they go into `extra=`, so log calls on the turn path
can never fail or dump whole transcripts.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any

# Attributes LogRecord reserves; passing them in extra raises KeyError
_RESERVED_KEYS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime"}


def preview_text(text: str | None, limit: int = 80) -> str:
    """Single-line preview of user or model text."""
    if not text:
        return ""
    flat = " ".join(text.split())
    if len(flat) <= limit:
        return flat
    return flat[: limit - 3] + "..."


def safe_log_value(value: Any, max_length: int = 500) -> str:
    """
    Safely convert any value to a string for logging.

    Handles lists, dicts, None, and other types safely.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, str):
            val_str = value
        elif isinstance(value, (list, tuple, set)):
            val_str = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, dict):
            val_str = f"dict({len(value)} keys)"
        else:
            val_str = str(value)

        if len(val_str) > max_length:
            return val_str[:max_length] + f"... (truncated, {len(val_str)} total)"
        return val_str
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"


def _safe_context(context: dict[str, Any]) -> dict[str, str]:
    safe: dict[str, str] = {}
    for key, val in context.items():
        name = f"ctx_{key}" if key in _RESERVED_KEYS else key
        safe[name] = safe_log_value(val)
    return safe


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """
    Log a message with structured context, safely converting all values.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Arbitrary key-value pairs attached to the record
    """
    logger.log(level, message, extra=_safe_context(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    level: int = logging.ERROR,
    **context: Any,
) -> None:
    """
    Log an exception with full context and traceback.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        level: Log level, ERROR by default; WARNING for degraded-but-handled paths
        **context: Additional key-value pairs
    """
    safe = _safe_context(context)
    safe.update({
        "error_type": type(exc).__name__,
        "error_msg": safe_log_value(str(exc)),
    })
    logger.log(level, message, extra=safe, exc_info=exc)
