"""Twitch chat client over TLS IRC."""

from .irc import ChatMessage, StatusEvent, TwitchChatClient  # noqa: F401

__version__ = "1.0.0"

__all__ = ["TwitchChatClient", "ChatMessage", "StatusEvent", "__version__"]
