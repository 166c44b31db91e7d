import pytest
import pytest_asyncio

from twitch_chat.irc.client import TwitchChatClient

from tests.helpers import FakeServer


@pytest_asyncio.fixture
async def server():
    return FakeServer()


@pytest.fixture
def client(server):
    bot = TwitchChatClient("testuser", "oauth:secret", connector=server.connector)
    bot.statuses = []  # type: ignore[attr-defined]
    bot.messages = []  # type: ignore[attr-defined]
    bot.on_status.subscribe(bot.statuses.append)  # type: ignore[attr-defined]
    bot.on_message.subscribe(bot.messages.append)  # type: ignore[attr-defined]
    return bot
