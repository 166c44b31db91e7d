from __future__ import annotations

import pytest

from twitch_chat.errors.internal import MalformedLineError
from twitch_chat.irc.parser import (
    ChannelAck,
    Message,
    Ping,
    ReconnectRequested,
    Unclassified,
    classify,
)


def test_ping_with_target():  # type: ignore[no-untyped-def]
    assert classify("PING :tmi.twitch.tv") == Ping(target=":tmi.twitch.tv")


def test_bare_ping_uses_default_target():  # type: ignore[no-untyped-def]
    assert classify("PING") == Ping(target=":tmi.twitch.tv")


def test_ping_must_be_whole_token():  # type: ignore[no-untyped-def]
    assert classify("PINGER :x") == Unclassified()


def test_privmsg_fields():  # type: ignore[no-untyped-def]
    parsed = classify(":nick!user@host PRIVMSG #channel :body text")
    assert parsed == Message(sender="nick", channel="channel", text="body text")


def test_privmsg_preserves_colons_and_spaces():  # type: ignore[no-untyped-def]
    parsed = classify(":bob!b@h PRIVMSG #foo :time is 12:30  :) ok")
    assert isinstance(parsed, Message)
    assert parsed.text == "time is 12:30  :) ok"


def test_privmsg_empty_body():  # type: ignore[no-untyped-def]
    parsed = classify(":bob!b@h PRIVMSG #foo :")
    assert isinstance(parsed, Message)
    assert parsed.text == ""


def test_privmsg_channel_without_hash():  # type: ignore[no-untyped-def]
    parsed = classify(":bob!b@h PRIVMSG foo :hi")
    assert isinstance(parsed, Message)
    assert parsed.channel == "foo"


def test_privmsg_without_bang_is_malformed():  # type: ignore[no-untyped-def]
    with pytest.raises(MalformedLineError) as exc_info:
        classify(":tmi.twitch.tv PRIVMSG #foo :hello")
    assert exc_info.value.line == ":tmi.twitch.tv PRIVMSG #foo :hello"


def test_privmsg_without_body_colon_is_malformed():  # type: ignore[no-untyped-def]
    with pytest.raises(MalformedLineError):
        classify("bob!b@h PRIVMSG #foo hello")


@pytest.mark.parametrize(
    "line, command",
    [
        (":bob!bob@bob.tmi.twitch.tv JOIN #foo", "JOIN"),
        (":tmi.twitch.tv ROOMSTATE #foo", "ROOMSTATE"),
    ],
)
def test_channel_acknowledgements(line, command):  # type: ignore[no-untyped-def]
    assert classify(line) == ChannelAck(command=command)


def test_reconnect_with_three_tokens():  # type: ignore[no-untyped-def]
    assert classify(":tmi.twitch.tv RECONNECT #foo") == ReconnectRequested()


@pytest.mark.parametrize(
    "line",
    [
        "",
        "   ",
        ":tmi.twitch.tv RECONNECT",
        ":tmi.twitch.tv 001 testuser :Welcome, GLHF!",
        ":bob!b@h PART #foo",
        "PRIVMSG #foo",
    ],
)
def test_unclassified_lines(line):  # type: ignore[no-untyped-def]
    assert classify(line) == Unclassified()
