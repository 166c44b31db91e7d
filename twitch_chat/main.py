#!/usr/bin/env python3
"""
Main entry point for the Twitch chat client
"""

import asyncio
import logging
import signal
import sys

from .config import ChatConfig
from .errors.handling import log_error
from .errors.internal import ConfigError, TransportError
from .logging_config import LoggerConfigurator
from .runner import ChatRunner


def _install_signal_handlers(runner: ChatRunner, task: asyncio.Task) -> None:  # pragma: no cover
    """First SIGINT/SIGTERM stops cooperatively, a second one cancels the run."""
    loop = asyncio.get_running_loop()

    def handler(signum: int) -> None:
        if runner.shutdown_initiated:
            logging.warning(f"🛑 Second signal - cancelling (signal={signum})")
            task.cancel()
            return
        logging.warning(f"🛑 Signal received - initiating shutdown (signal={signum})")
        runner.stop()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, handler, sig)
        except NotImplementedError:
            # Windows event loops do not support add_signal_handler
            signal.signal(sig, lambda signum, _frame: handler(signum))


async def main(config: ChatConfig | None = None) -> int:
    """Load configuration and run chat sessions until shutdown.

    Returns:
        Process exit code.
    """
    try:
        config = config or ChatConfig.from_env()
    except ConfigError as e:
        log_error("Configuration error", e)
        return 2

    runner = ChatRunner(config)
    current = asyncio.current_task()
    if current is not None:
        _install_signal_handlers(runner, current)
    logging.info(f"🚀 Starting Twitch chat client {config.summary()}")
    try:
        await runner.run()
    except TransportError as e:
        log_error("Could not reach Twitch chat", e)
        return 1
    except asyncio.CancelledError:
        pass
    finally:
        runner.close()
        logging.info("✅ Application shutdown complete")
    return 0


def health_check() -> int:
    """Validate configuration without connecting."""
    try:
        config = ChatConfig.from_env()
    except ConfigError as e:
        logging.error(f"❌ Health check failed: {e}")
        return 1
    logging.info(
        f"✅ Health check passed - {config.username} with {len(config.channels)} channel(s)"
    )
    return 0


def run() -> None:
    """Synchronous entry point for the application."""
    LoggerConfigurator().configure()
    if len(sys.argv) > 1 and sys.argv[1] == "--health-check":
        sys.exit(health_check())
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    run()
