"""TLS transport to the Twitch IRC endpoint."""

from __future__ import annotations

import asyncio
import logging
import ssl
from collections.abc import Awaitable, Callable

from ..constants import READ_BUFFER_LIMIT
from ..errors.internal import TransportError
from ..logs.logger import logger

StreamPair = tuple[asyncio.StreamReader, asyncio.StreamWriter]
Connector = Callable[[str, int], Awaitable[StreamPair]]


def create_ssl_context() -> ssl.SSLContext:
    """Strict client context: system trust store, hostname check, no pinning."""
    context = ssl.create_default_context(ssl.Purpose.SERVER_AUTH)
    context.check_hostname = True
    context.verify_mode = ssl.CERT_REQUIRED
    return context


async def open_secure_stream(
    host: str, port: int, *, ssl_context: ssl.SSLContext | None = None
) -> StreamPair:
    """Open a TCP connection to ``host:port`` and complete the TLS handshake.

    Raises:
        TransportError: on DNS/connect failure or failed certificate validation.
    """
    context = ssl_context or create_ssl_context()
    try:
        reader, writer = await asyncio.open_connection(
            host,
            port,
            ssl=context,
            server_hostname=host,
            limit=READ_BUFFER_LIMIT,
        )
    except ssl.SSLCertVerificationError as e:
        logger.log_event(
            "irc",
            "transport_error",
            level=logging.ERROR,
            server=host,
            port=port,
            error=getattr(e, "verify_message", None) or str(e),
        )
        raise TransportError(
            f"Certificate validation failed for {host}",
            data={"host": host, "port": port},
        ) from e
    except OSError as e:
        logger.log_event(
            "irc",
            "transport_error",
            level=logging.ERROR,
            server=host,
            port=port,
            error=str(e),
        )
        raise TransportError(
            f"Could not connect to {host}:{port}", data={"host": host, "port": port}
        ) from e
    logger.log_event("irc", "connection_established", level=logging.DEBUG)
    return reader, writer
