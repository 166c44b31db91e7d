"""Newline-framed text channel over an asyncio stream pair."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from ..errors.internal import ChannelClosedError
from ..logs.logger import logger


@dataclass(frozen=True, slots=True)
class Line:
    text: str


@dataclass(frozen=True, slots=True)
class EndOfStream:
    pass


@dataclass(frozen=True, slots=True)
class ReadError:
    error: BaseException


ReadResult = Line | EndOfStream | ReadError


class LineChannel:
    """Reads LF/CRLF terminated lines and writes CRLF terminated lines.

    ``write_line`` drains the writer before returning, so each call puts one
    whole line on the wire.
    """

    TERMINATOR = "\r\n"

    def __init__(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        self.reader = reader
        self.writer = writer
        self.closed = False

    async def read_line(self) -> ReadResult:
        try:
            data = await self.reader.readline()
        except (OSError, ValueError) as e:
            # ValueError: line longer than the reader limit
            return ReadError(e)
        if not data:
            return EndOfStream()
        # An unterminated tail before EOF is still delivered as a line.
        return Line(data.decode("utf-8", errors="ignore").rstrip("\r\n"))

    async def write_line(self, text: str) -> None:
        if self.closed:
            raise ChannelClosedError("Line channel is closed", data={"line": text})
        self.writer.write(f"{text}{self.TERMINATOR}".encode())
        await self.writer.drain()

    async def close(self) -> bool:
        """Close the underlying writer; returns False if already closed."""
        if self.closed:
            return False
        self.closed = True
        self.writer.close()
        try:
            await self.writer.wait_closed()
        except (OSError, asyncio.IncompleteReadError) as e:
            # Peer already dropped the TLS session; the socket is released anyway.
            logger.log_event(
                "irc", "closed", level=logging.DEBUG, error=str(e)
            )
        return True
