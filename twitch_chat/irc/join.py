"""Join workflow gated on the connection-ready signal."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..constants import STATUS_CONNECTING, STATUS_ERROR_EXCEPTION
from ..errors.internal import NetworkError
from ..logs.logger import logger
from .models import StatusEvent

if TYPE_CHECKING:  # pragma: no cover
    from .client import TwitchChatClient


def normalize_channel(name: str) -> str:
    return name.strip().lstrip("#").lower()


class IRCJoinManager:
    def __init__(self, client: TwitchChatClient):
        self.client = client
        self.requested_channels: list[str] = []

    async def join_channel(self, name: str) -> bool:
        """Wait for the handshake, then request ``name``.

        Returns False when the JOIN line could not be written; the failure is
        reported as an error status instead of being raised.
        """
        channel = normalize_channel(name)
        ready = self.client.ready_signal
        if not ready.is_set():
            logger.log_event(
                "irc",
                "join_wait",
                level=logging.DEBUG,
                user=self.client.username,
                channel=channel,
            )
            await ready.wait()

        self.client.on_status.emit(StatusEvent(False, STATUS_CONNECTING))
        try:
            await self.client.send_line(f"JOIN #{channel}")
        except (NetworkError, OSError) as e:
            logger.log_event(
                "irc",
                "join_failed",
                level=logging.ERROR,
                user=self.client.username,
                channel=channel,
                error=str(e),
                error_type=type(e).__name__,
            )
            self.client.on_status.emit(
                StatusEvent(True, STATUS_ERROR_EXCEPTION, str(e))
            )
            return False

        if channel not in self.requested_channels:
            self.requested_channels.append(channel)
        logger.log_event(
            "irc", "join_sent", user=self.client.username, channel=channel
        )
        return True
