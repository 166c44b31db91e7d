"""Host-side session runner: joins channels, logs chat and handles RECONNECT."""

from __future__ import annotations

import asyncio
import logging

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .config import ChatConfig
from .constants import (
    INITIAL_BACKOFF_SECONDS,
    MAX_BACKOFF_SECONDS,
    RECONNECT_DELAY,
    RECONNECT_MAX_ATTEMPTS,
    STATUS_ERROR_RECONNECT,
)
from .errors.internal import TransportError
from .irc.client import TwitchChatClient
from .irc.models import ChatMessage, StatusEvent
from .logs.logger import logger


class ChatRunner:
    """Drives a :class:`TwitchChatClient` on behalf of a hosting application.

    The client itself never reconnects. The runner starts a fresh session
    when the server sends RECONNECT (if ``config.reconnect`` is set) and
    retries transport failures with exponential backoff.
    """

    def __init__(
        self,
        config: ChatConfig,
        client: TwitchChatClient | None = None,
        *,
        max_attempts: int = RECONNECT_MAX_ATTEMPTS,
        reconnect_delay: float = RECONNECT_DELAY,
        backoff_multiplier: float = INITIAL_BACKOFF_SECONDS,
        backoff_max: float = MAX_BACKOFF_SECONDS,
    ) -> None:
        self.config = config
        self.client = client or TwitchChatClient(
            config.username, config.token, host=config.host, port=config.port
        )
        if not self.client.is_initialized():
            self.client.set_credentials(config.username, config.token)
        self.max_attempts = max_attempts
        self.reconnect_delay = reconnect_delay
        self.backoff_multiplier = backoff_multiplier
        self.backoff_max = backoff_max
        self.shutdown_initiated = False
        self.reconnect_requested = False
        self.sessions = 0
        self._unsubscribers = [
            self.client.on_message.subscribe(self._on_message),
            self.client.on_status.subscribe(self._on_status),
        ]

    def _on_message(self, message: ChatMessage) -> None:
        logger.log_event(
            "irc",
            "privmsg",
            user=self.config.username,
            channel=message.channel,
            author=message.sender,
            chat_message=message.message,
        )

    def _on_status(self, event: StatusEvent) -> None:
        logger.log_event(
            "runner",
            "status",
            level=logging.WARNING if event.is_error else logging.INFO,
            user=self.config.username,
            status_key=event.status_key,
            detail=event.raw_detail,
        )
        if event.status_key == STATUS_ERROR_RECONNECT:
            self.reconnect_requested = True
            self.client.disconnect()

    def stop(self) -> None:
        """Request a cooperative shutdown of the current and future sessions."""
        if self.shutdown_initiated:
            return
        self.shutdown_initiated = True
        logger.log_event("runner", "shutdown", level=logging.WARNING, user=self.config.username)
        self.client.disconnect()

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    async def run_session(self) -> None:
        """One client session with the configured channels joined."""
        if self.shutdown_initiated:
            return
        self.sessions += 1
        joins = [
            asyncio.create_task(self.client.join_channel(channel))
            for channel in self.config.channels
        ]
        try:
            await self.client.start()
        finally:
            for task in joins:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*joins, return_exceptions=True)

    def _log_retry(self, retry_state: RetryCallState) -> None:
        logger.log_event(
            "runner",
            "transport_retry",
            level=logging.WARNING,
            user=self.config.username,
            attempt=retry_state.attempt_number,
        )

    async def _run_with_retry(self) -> None:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(
                multiplier=self.backoff_multiplier, max=self.backoff_max
            ),
            retry=retry_if_exception_type(TransportError),
            before_sleep=self._log_retry,
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                await self.run_session()

    async def run(self) -> None:
        """Run sessions until shutdown, a fatal error, or retries are exhausted.

        Raises:
            TransportError: when every connection attempt failed.
        """
        logger.log_event(
            "runner",
            "start",
            user=self.config.username,
            channels=", ".join(self.config.channels) or "-",
        )
        while not self.shutdown_initiated:
            self.reconnect_requested = False
            try:
                await self._run_with_retry()
            except TransportError:
                logger.log_event(
                    "runner",
                    "giving_up",
                    level=logging.ERROR,
                    user=self.config.username,
                    attempts=self.max_attempts,
                )
                raise
            logger.log_event("runner", "session_end", user=self.config.username)
            if not (self.reconnect_requested and self.config.reconnect):
                break
            if self.shutdown_initiated:
                break
            logger.log_event(
                "runner",
                "reconnect",
                level=logging.WARNING,
                user=self.config.username,
                delay=self.reconnect_delay,
            )
            await asyncio.sleep(self.reconnect_delay)
            # Fresh credentials let the next session announce ``connected``.
            self.client.set_credentials(self.config.username, self.config.token)
