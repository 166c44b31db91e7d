"""
Configuration constants for the Twitch chat client

This module contains all configurable constants used throughout the application.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, logs a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Attempts to parse the environment variable as a float. If the variable
    is not set or cannot be parsed, logs a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


# Twitch IRC endpoint (TLS)
TWITCH_IRC_HOST = os.getenv("TWITCH_IRC_HOST", "irc.chat.twitch.tv")
TWITCH_IRC_PORT = _get_env_int("TWITCH_IRC_PORT", 6697)  # TLS port

# Stream reader limit; a longer line without a delimiter is a read failure
READ_BUFFER_LIMIT = _get_env_int("READ_BUFFER_LIMIT", 64 * 1024)

# Target used when a server PING carries no argument
DEFAULT_PING_TARGET = ":tmi.twitch.tv"

# Status keys delivered to status subscribers
STATUS_CONNECTING = "twitch.status.connecting"
STATUS_CONNECTED = "twitch.status.connected"
STATUS_ERROR_RECONNECT = "twitch.status.error.reconnect"
STATUS_ERROR_EXCEPTION = "twitch.status.error.exception"

# Host runner reconnect/backoff constants
RECONNECT_MAX_ATTEMPTS = _get_env_int(
    "RECONNECT_MAX_ATTEMPTS", 10
)  # Maximum consecutive transport failures before giving up
INITIAL_BACKOFF_SECONDS = _get_env_float(
    "INITIAL_BACKOFF_SECONDS", 1.0
)  # Initial backoff time in seconds
MAX_BACKOFF_SECONDS = _get_env_float(
    "MAX_BACKOFF_SECONDS", 30.0
)  # Maximum backoff time in seconds
RECONNECT_DELAY = _get_env_float(
    "RECONNECT_DELAY", 2.0
)  # Pause between a finished session and the next one
