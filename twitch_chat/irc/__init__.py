"""IRC subsystem package.

Contains the TLS transport, line framing, parser, dispatcher, join and
client lifecycle modules for Twitch chat.
"""

from .client import TwitchChatClient  # noqa: F401
from .dispatcher import IRCDispatcher  # noqa: F401
from .events import EventStream  # noqa: F401
from .join import IRCJoinManager  # noqa: F401
from .line_channel import EndOfStream, Line, LineChannel, ReadError  # noqa: F401
from .models import ChatMessage, ConnectionState, Credentials, StatusEvent  # noqa: F401
from .parser import (  # noqa: F401
    ChannelAck,
    Message,
    ParsedLine,
    Ping,
    ReconnectRequested,
    Unclassified,
    classify,
)
from .transport import create_ssl_context, open_secure_stream  # noqa: F401

__all__ = [
    "TwitchChatClient",
    "IRCDispatcher",
    "EventStream",
    "IRCJoinManager",
    "LineChannel",
    "Line",
    "EndOfStream",
    "ReadError",
    "ChatMessage",
    "ConnectionState",
    "Credentials",
    "StatusEvent",
    "ParsedLine",
    "Ping",
    "Message",
    "ChannelAck",
    "ReconnectRequested",
    "Unclassified",
    "classify",
    "create_ssl_context",
    "open_secure_stream",
]
