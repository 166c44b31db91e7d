"""
Console logging setup for the Twitch chat client (colorlog based).
"""

import logging
import os
import re
import sys

import colorlog

_OAUTH_PATTERN = re.compile(r"oauth:[A-Za-z0-9]+")

_LEVEL_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


class TokenRedactionFilter(logging.Filter):
    """Filter that masks ``oauth:`` tokens before a record is emitted."""

    def filter(self, record):
        message = record.getMessage()
        if "oauth:" in message:
            record.msg = _OAUTH_PATTERN.sub("oauth:***", message)
            record.args = None
        return True


def debug_requested(environ=None) -> bool:
    value = (environ if environ is not None else os.environ).get("DEBUG", "")
    return value.lower() in ("true", "1", "yes")


def build_formatter(debug: bool) -> colorlog.ColoredFormatter:
    # Debug output names the emitting module so IRC traffic can be told
    # apart from runner chatter.
    fmt = "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s "
    if debug:
        fmt += "%(light_black)s%(name)-22s%(reset)s "
    fmt += "%(message)s"
    return colorlog.ColoredFormatter(
        fmt,
        datefmt="%H:%M:%S",
        log_colors=_LEVEL_COLORS,
        reset=True,
    )


class LoggerConfigurator:
    """Installs one colored stderr handler on the root logger.

    Uses environment variables:
    - DEBUG: 'true', '1' or 'yes' selects DEBUG level, otherwise INFO
    """

    def __init__(self, stream=None, environ=None):
        self.stream = stream or sys.stderr
        self.environ = environ

    def configure(self) -> logging.Handler:
        debug = debug_requested(self.environ)
        level = logging.DEBUG if debug else logging.INFO

        handler = logging.StreamHandler(self.stream)
        handler.setFormatter(build_formatter(debug))
        handler.addFilter(TokenRedactionFilter())

        root_logger = logging.getLogger()
        for existing in list(root_logger.handlers):
            if isinstance(existing.formatter, colorlog.ColoredFormatter):
                root_logger.removeHandler(existing)
        root_logger.addHandler(handler)
        root_logger.setLevel(level)

        # asyncio debug chatter is noise for a long-running chat connection
        logging.getLogger("asyncio").setLevel(logging.WARNING)
        return handler
