"""Reaction to classified lines (PONG, chat delivery, status changes)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..constants import STATUS_CONNECTED, STATUS_ERROR_RECONNECT
from ..logs.logger import logger
from .models import ChatMessage, StatusEvent
from .parser import ChannelAck, Message, Ping, ReconnectRequested, classify

if TYPE_CHECKING:  # pragma: no cover
    from .client import TwitchChatClient


class IRCDispatcher:
    def __init__(self, client: TwitchChatClient):
        self.client = client

    async def handle_line(self, raw_line: str) -> None:
        """Classify one line and react to it.

        Raises:
            MalformedLineError: propagated from the parser.
            ChannelClosedError / OSError: when the PONG reply cannot be written.
        """
        if not raw_line.startswith("PING"):
            logger.log_event(
                "irc",
                "raw",
                level=logging.DEBUG,
                user=self.client.username,
                raw=raw_line,
            )

        parsed = classify(raw_line)
        if isinstance(parsed, Ping):
            await self._handle_ping(parsed)
        elif isinstance(parsed, Message):
            self._handle_privmsg(parsed)
        elif isinstance(parsed, ChannelAck):
            self._handle_channel_ack(parsed)
        elif isinstance(parsed, ReconnectRequested):
            self._handle_reconnect()

    async def _handle_ping(self, ping: Ping) -> None:
        await self.client.send_line(f"PONG {ping.target}")
        logger.log_event(
            "irc",
            "pong_sent",
            level=logging.DEBUG,
            user=self.client.username,
            target=ping.target,
        )

    def _handle_privmsg(self, message: Message) -> None:
        logger.log_event(
            "irc",
            "privmsg",
            level=logging.DEBUG,
            user=self.client.username,
            channel=message.channel,
            author=message.sender,
            chat_message=message.text,
        )
        self.client.on_message.emit(
            ChatMessage(
                sender=message.sender, message=message.text, channel=message.channel
            )
        )

    def _handle_channel_ack(self, ack: ChannelAck) -> None:
        if self.client.announced_connected:
            return
        logger.log_event(
            "irc", "channel_ack", user=self.client.username, command=ack.command
        )
        self.client.on_status.emit(StatusEvent(False, STATUS_CONNECTED))
        self.client.announced_connected = True

    def _handle_reconnect(self) -> None:
        logger.log_event(
            "irc",
            "reconnect_requested",
            level=logging.WARNING,
            user=self.client.username,
        )
        self.client.on_status.emit(StatusEvent(True, STATUS_ERROR_RECONNECT))
