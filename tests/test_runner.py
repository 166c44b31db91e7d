"""
Tests for the host-side ChatRunner.
"""

import asyncio

import pytest

from twitch_chat.config import ChatConfig
from twitch_chat.constants import STATUS_CONNECTED
from twitch_chat.errors.internal import TransportError
from twitch_chat.irc.client import TwitchChatClient
from twitch_chat.runner import ChatRunner

from tests.helpers import FakeServer, settle


def make_config(**overrides) -> ChatConfig:
    data = {"username": "TestUser", "token": "secret", "channels": ["Foo"]}
    data.update(overrides)
    return ChatConfig.from_mapping(data)


def make_runner(config: ChatConfig, connector, **kwargs) -> ChatRunner:
    client = TwitchChatClient(config.username, config.token, connector=connector)
    kwargs.setdefault("reconnect_delay", 0)
    kwargs.setdefault("backoff_multiplier", 0)
    return ChatRunner(config, client, **kwargs)


class TestChatRunner:
    @pytest.mark.asyncio
    async def test_session_joins_configured_channels(self):
        server = FakeServer()
        runner = make_runner(make_config(), server.connector)

        task = asyncio.create_task(runner.run())
        await settle()
        runner.stop()
        server.hang_up()
        await task

        assert server.writer.lines == [
            "PASS oauth:secret",
            "NICK testuser",
            "JOIN #foo",
        ]
        assert runner.sessions == 1

    @pytest.mark.asyncio
    async def test_reconnect_notice_starts_new_session(self):
        first, second = FakeServer(), FakeServer()
        servers = iter([first, second])

        async def connector(host, port):
            return await next(servers).connector(host, port)

        runner = make_runner(make_config(), connector)
        first.send(":tmi.twitch.tv RECONNECT #foo")
        first.hang_up()
        second.hang_up()

        await runner.run()

        assert runner.sessions == 2
        assert first.writer.close_calls == 1
        assert second.writer.close_calls == 1
        assert second.writer.lines[:2] == ["PASS oauth:secret", "NICK testuser"]

    @pytest.mark.asyncio
    async def test_reconnected_session_announces_connected_again(self):
        first, second = FakeServer(), FakeServer()
        servers = iter([first, second])

        async def connector(host, port):
            return await next(servers).connector(host, port)

        runner = make_runner(make_config(channels=[]), connector)
        statuses: list = []
        runner.client.on_status.subscribe(statuses.append)
        first.send(":testuser!u@h JOIN #foo", ":tmi.twitch.tv RECONNECT #foo")
        first.hang_up()
        second.send(":testuser!u@h JOIN #foo")
        second.hang_up()

        await runner.run()

        assert [s.status_key for s in statuses if not s.is_error] == [
            STATUS_CONNECTED,
            STATUS_CONNECTED,
        ]

    @pytest.mark.asyncio
    async def test_reconnect_disabled_stops_after_first_session(self):
        server = FakeServer()
        runner = make_runner(make_config(reconnect=False), server.connector)
        server.send(":tmi.twitch.tv RECONNECT #foo")
        server.hang_up()

        await runner.run()

        assert runner.sessions == 1

    @pytest.mark.asyncio
    async def test_fatal_error_ends_run_without_reconnect(self):
        server = FakeServer()
        runner = make_runner(make_config(), server.connector)
        server.hang_up()

        await runner.run()

        assert runner.sessions == 1
        assert runner.reconnect_requested is False

    @pytest.mark.asyncio
    async def test_transport_errors_are_retried(self):
        server = FakeServer()
        attempts = 0

        async def flaky(host, port):
            nonlocal attempts
            attempts += 1
            if attempts < 3:
                raise TransportError("unreachable")
            return await server.connector(host, port)

        runner = make_runner(make_config(channels=[]), flaky, max_attempts=5)
        server.hang_up()

        await runner.run()

        assert attempts == 3
        assert server.writer.close_calls == 1

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self):
        attempts = 0

        async def unreachable(host, port):
            nonlocal attempts
            attempts += 1
            raise TransportError("unreachable")

        runner = make_runner(make_config(), unreachable, max_attempts=3)

        with pytest.raises(TransportError):
            await runner.run()
        assert attempts == 3

    @pytest.mark.asyncio
    async def test_stop_before_run_starts_nothing(self):
        server = FakeServer()
        runner = make_runner(make_config(), server.connector)

        runner.stop()
        await runner.run()

        assert runner.sessions == 0
        assert server.connect_calls == []

    def test_close_unsubscribes_listeners(self):
        config = make_config()
        client = TwitchChatClient(config.username, config.token)
        runner = ChatRunner(config, client)
        assert len(client.on_status) == 1

        runner.close()

        assert len(client.on_status) == 0
        assert len(client.on_message) == 0

    def test_runner_fills_missing_credentials(self):
        config = make_config()
        client = TwitchChatClient()

        ChatRunner(config, client)

        assert client.username == "testuser"
        assert client.credentials.password == "oauth:secret"
