"""Line classification for the Twitch IRC dialect."""

from __future__ import annotations

from dataclasses import dataclass

from ..constants import DEFAULT_PING_TARGET
from ..errors.internal import MalformedLineError


@dataclass(frozen=True, slots=True)
class Ping:
    target: str


@dataclass(frozen=True, slots=True)
class Message:
    sender: str
    channel: str
    text: str


@dataclass(frozen=True, slots=True)
class ChannelAck:
    command: str


@dataclass(frozen=True, slots=True)
class ReconnectRequested:
    pass


@dataclass(frozen=True, slots=True)
class Unclassified:
    pass


ParsedLine = Ping | Message | ChannelAck | ReconnectRequested | Unclassified

_CHANNEL_ACK_COMMANDS = frozenset({"JOIN", "ROOMSTATE"})


def classify(line: str) -> ParsedLine:
    """Classify a raw protocol line.

    ``PING`` takes precedence over everything else. Otherwise the second
    token is the command word, provided the line has at least three tokens.

    Raises:
        MalformedLineError: for a PRIVMSG whose prefix has no ``!`` or whose
            body has no leading ``:``.
    """
    tokens = line.split()
    if tokens and tokens[0] == "PING":
        return Ping(target=tokens[1] if len(tokens) > 1 else DEFAULT_PING_TARGET)

    if len(tokens) > 2:
        command = tokens[1]
        if command == "PRIVMSG":
            return _parse_privmsg(line, tokens)
        if command in _CHANNEL_ACK_COMMANDS:
            return ChannelAck(command=command)
        if command == "RECONNECT":
            return ReconnectRequested()
    return Unclassified()


def _parse_privmsg(line: str, tokens: list[str]) -> Message:
    prefix = tokens[0]
    bang = prefix.find("!")
    if bang < 1:
        raise MalformedLineError("PRIVMSG prefix has no nick!user separator", line)
    # The prefix colon is at index 0; the body starts after the next one.
    body_colon = line.find(":", 1)
    if body_colon == -1:
        raise MalformedLineError("PRIVMSG has no message body", line)
    return Message(
        sender=prefix[1:bang],
        channel=tokens[2].lstrip("#"),
        text=line[body_colon + 1 :],
    )
