"""Centralized internal error hierarchy.

These exceptions provide semantic categories for the chat client's failure
paths. Raw ``OSError`` / ``ssl.SSLError`` values never cross the client
boundary; they are wrapped in one of the classes below first.

Classes:
  InternalError        – Base for all internal errors.
  NetworkError         – Transport / stream level failures.
  TransportError       – Connecting or TLS certificate validation failed.
  ProtocolReadFailure  – A read produced no usable line (EOF or fault).
  ChannelClosedError   – A write was attempted on a closed line channel.
  ParsingError         – A received line could not be interpreted.
  MalformedLineError   – A line has a known command but misses delimiters.
  ConfigError          – Invalid or missing configuration values.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class NetworkError(InternalError):
    """Exception raised for network or transport layer errors."""


class TransportError(NetworkError):
    """Raised when the TCP connection or the TLS handshake fails.

    Certificate validation failures land here as well; they are never
    downgraded to a warning.
    """


class ProtocolReadFailure(NetworkError):
    """Raised when a read yields no usable line.

    The most common cause is the server closing the stream right after it
    rejected the PASS/NICK credentials.
    """


class ChannelClosedError(NetworkError):
    """Raised when writing to a line channel that has already been closed."""


class ParsingError(InternalError):
    """Exception raised when a protocol line cannot be interpreted."""


class MalformedLineError(ParsingError):
    """Raised for a PRIVMSG line missing its ``!`` prefix separator or body colon.

    Attributes:
        line: The offending raw line (also available under ``data["line"]``).
    """

    def __init__(self, message: str, line: str) -> None:
        super().__init__(message, data={"line": line})
        self.line = line


class ConfigError(InternalError):
    """Exception raised for invalid or incomplete configuration."""


__all__ = [
    "InternalError",
    "NetworkError",
    "TransportError",
    "ProtocolReadFailure",
    "ChannelClosedError",
    "ParsingError",
    "MalformedLineError",
    "ConfigError",
]
