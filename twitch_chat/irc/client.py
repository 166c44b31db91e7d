"""Twitch chat client: connection lifecycle and read loop."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from ..constants import STATUS_ERROR_EXCEPTION, TWITCH_IRC_HOST, TWITCH_IRC_PORT
from ..errors.internal import (
    ChannelClosedError,
    MalformedLineError,
    NetworkError,
    ProtocolReadFailure,
    TransportError,
)
from ..logs.logger import ChatLogger, logger
from .dispatcher import IRCDispatcher
from .events import EventStream
from .join import IRCJoinManager
from .line_channel import EndOfStream, LineChannel, ReadError
from .models import ChatMessage, ConnectionState, Credentials, StatusEvent
from .transport import Connector, open_secure_stream


class TwitchChatClient:  # pylint: disable=too-many-instance-attributes
    """One chat session at a time over TLS to Twitch IRC.

    Lifecycle: ``IDLE -> CONNECTING -> AUTHENTICATING -> RUNNING -> CLOSING
    -> CLOSED``. Failures after the transport is up jump straight to CLOSING,
    are reported once on ``on_status`` and never escape :meth:`start`.

    ``disconnect`` is cooperative: the loop notices the cleared run flag only
    after the read in flight returns.
    """

    def __init__(
        self,
        username: str | None = None,
        password: str | None = None,
        *,
        event_logger: ChatLogger | None = None,
        connector: Connector | None = None,
        host: str = TWITCH_IRC_HOST,
        port: int = TWITCH_IRC_PORT,
    ) -> None:
        self.credentials = Credentials(username or "", password or "")
        self.event_logger = event_logger or logger
        self.host = host
        self.port = port
        self._connector: Connector = connector or open_secure_stream
        self.on_message: EventStream[ChatMessage] = EventStream("message")
        self.on_status: EventStream[StatusEvent] = EventStream("status")
        self.state = ConnectionState.IDLE
        self.running = True
        self.announced_connected = False
        self.ready_signal = asyncio.Event()
        self.channel: LineChannel | None = None
        self.lines_read = 0
        self.dispatcher = IRCDispatcher(self)
        self.join_manager = IRCJoinManager(self)

    @property
    def username(self) -> str:
        return self.credentials.username

    def _set_state(self, new_state: ConnectionState) -> None:
        if self.state != new_state:
            logger.log_event(
                "irc",
                "state_change",
                level=logging.DEBUG,
                user=self.username,
                old_state=self.state.name,
                new_state=new_state.name,
            )
            self.state = new_state

    def set_credentials(self, username: str, password: str) -> None:
        self.credentials = Credentials(username, password)
        self.announced_connected = False
        logger.log_event(
            "irc", "credentials_updated", level=logging.DEBUG, user=username
        )

    def is_initialized(self) -> bool:
        return self.credentials.is_complete()

    async def start(self) -> None:
        """Run one session until ``disconnect`` or a fatal read/parse error.

        Credentials are not validated here; callers check
        :meth:`is_initialized` first.

        Raises:
            TransportError: if the TLS connection cannot be established.
        """
        if self.ready_signal.is_set():
            # Previous session resolved it; joins for this session wait anew.
            self.ready_signal = asyncio.Event()
        self.lines_read = 0

        self._set_state(ConnectionState.CONNECTING)
        logger.log_event(
            "irc", "connect_start", user=self.username, server=self.host, port=self.port
        )
        try:
            reader, writer = await self._connector(self.host, self.port)
        except TransportError:
            self._set_state(ConnectionState.CLOSED)
            raise
        except OSError as e:
            self._set_state(ConnectionState.CLOSED)
            raise TransportError(
                f"Could not connect to {self.host}:{self.port}",
                data={"host": self.host, "port": self.port},
            ) from e

        self.channel = LineChannel(reader, writer)
        try:
            self._set_state(ConnectionState.AUTHENTICATING)
            await self._authenticate()
            self._set_state(ConnectionState.RUNNING)
            await self._read_loop()
        except (NetworkError, MalformedLineError, OSError) as e:
            self._report_fatal(e)
        finally:
            await self._cleanup()

    async def _authenticate(self) -> None:
        await self.send_line(f"PASS {self.credentials.password}")
        await self.send_line(f"NICK {self.credentials.username}")
        logger.log_event("irc", "auth_sent", level=logging.DEBUG, user=self.username)
        self.ready_signal.set()
        logger.log_event("irc", "ready", level=logging.DEBUG, user=self.username)

    async def _read_loop(self) -> None:
        # TODO: add a stale-connection watchdog (no PING for ~5 min) so a
        # silent peer does not suspend read_line forever.
        channel = self.channel
        assert channel is not None
        while self.running:
            result = await channel.read_line()
            if not self.running:
                break
            if isinstance(result, EndOfStream):
                raise ProtocolReadFailure("Server closed the connection")
            if isinstance(result, ReadError):
                raise ProtocolReadFailure(
                    f"Read failed: {result.error}",
                    data={"error_type": type(result.error).__name__},
                ) from result.error
            self.lines_read += 1
            await self.dispatcher.handle_line(result.text)

    def _report_fatal(self, error: Exception) -> None:
        if isinstance(error, MalformedLineError):
            self.event_logger.log_event(
                "irc",
                "malformed_line",
                level=logging.DEBUG,
                user=self.username,
                raw=error.line,
                error=str(error),
            )
        else:
            self.event_logger.log_event(
                "irc",
                "read_failure",
                level=logging.DEBUG,
                user=self.username,
                error=str(error),
                error_type=type(error).__name__,
            )
        self.on_status.emit(StatusEvent(True, STATUS_ERROR_EXCEPTION, str(error)))

    async def _cleanup(self) -> None:
        self._set_state(ConnectionState.CLOSING)
        channel, self.channel = self.channel, None
        if channel is not None and await channel.close():
            logger.log_event("irc", "closed", level=logging.DEBUG, user=self.username)
        self._set_state(ConnectionState.CLOSED)
        # A stop request applies to one session; the next start() runs again.
        self.running = True

    async def send_line(self, text: str) -> None:
        channel = self.channel
        if channel is None:
            raise ChannelClosedError("Not connected", data={"line": text})
        await channel.write_line(text)

    async def join_channel(self, name: str) -> bool:
        return await self.join_manager.join_channel(name)

    def disconnect(self) -> None:
        self.running = False
        logger.log_event(
            "irc", "disconnect_requested", level=logging.DEBUG, user=self.username
        )

    def get_connection_stats(self) -> dict[str, Any]:
        return {
            "state": self.state.name,
            "running": self.running,
            "ready": self.ready_signal.is_set(),
            "announced_connected": self.announced_connected,
            "lines_read": self.lines_read,
            "channels": list(self.join_manager.requested_channels),
            "message_listeners": len(self.on_message),
            "status_listeners": len(self.on_status),
        }
