from __future__ import annotations

import logging

from .internal import (
    ConfigError,
    InternalError,
    NetworkError,
    ParsingError,
)

_logger = logging.getLogger("twitch_chat.errors")


def error_category(error: Exception) -> str:
    if isinstance(error, NetworkError | OSError):
        return "network"
    if isinstance(error, ParsingError):
        return "parsing"
    if isinstance(error, ConfigError):
        return "config"
    if isinstance(error, InternalError):
        return "internal"
    return "unknown"


def log_error(message: str, error: Exception, context: dict | None = None) -> str:
    """Logs an error message with the associated exception details.

    Context from ``error.data`` is appended after any explicit context; the
    explicit value wins on key clashes.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.

    Returns:
        The category the error was logged under.
    """
    category = error_category(error)
    merged = dict(context or {})
    if isinstance(error, InternalError):
        for key, value in error.data.items():
            merged.setdefault(key, value)

    line = f"[{category.upper()}] {message}: {error} ({type(error).__name__})"
    if merged:
        line += " | " + " ".join(f"{k}={v}" for k, v in merged.items())
    _logger.error(line)
    return category
