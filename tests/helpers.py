import asyncio


class FakeWriter:
    """Stand-in for asyncio.StreamWriter that records everything written."""

    def __init__(self) -> None:
        self.buffer = b""
        self.close_calls = 0
        self.drain_calls = 0

    def write(self, data: bytes) -> None:
        self.buffer += data

    async def drain(self) -> None:
        self.drain_calls += 1

    def close(self) -> None:
        self.close_calls += 1

    async def wait_closed(self) -> None:
        return None

    @property
    def lines(self) -> list[str]:
        text = self.buffer.decode("utf-8")
        return [line for line in text.split("\r\n") if line]


class FakeServer:
    """Reader/writer pair plus a connector that hands them to the client.

    Must be created inside a running event loop.
    """

    def __init__(self) -> None:
        self.reader = asyncio.StreamReader()
        self.writer = FakeWriter()
        self.connect_calls: list[tuple[str, int]] = []

    async def connector(self, host: str, port: int):  # type: ignore[no-untyped-def]
        self.connect_calls.append((host, port))
        return self.reader, self.writer

    def send(self, *lines: str) -> None:
        for line in lines:
            self.reader.feed_data(f"{line}\r\n".encode())

    def hang_up(self) -> None:
        self.reader.feed_eof()


async def settle(rounds: int = 10) -> None:
    """Let other tasks run until they block again."""
    for _ in range(rounds):
        await asyncio.sleep(0)
