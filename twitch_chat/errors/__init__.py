"""Error hierarchy and error logging helpers."""

from .internal import (  # noqa: F401
    ChannelClosedError,
    ConfigError,
    InternalError,
    MalformedLineError,
    NetworkError,
    ParsingError,
    ProtocolReadFailure,
    TransportError,
)

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
