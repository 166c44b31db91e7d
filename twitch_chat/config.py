"""
Configuration for the Twitch chat client CLI.

Values come from the environment; nothing is written back to disk.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from .constants import TWITCH_IRC_HOST, TWITCH_IRC_PORT
from .errors.internal import ConfigError


def normalize_token(token: str) -> str:
    """Return ``token`` in the ``oauth:<token>`` form Twitch expects for PASS."""
    token = token.strip()
    return token if token.startswith("oauth:") else f"oauth:{token}"


def normalize_channels(channels: list[str]) -> list[str]:
    """Lowercase, strip ``#`` and drop duplicates while keeping order."""
    cleaned = (c.strip().lstrip("#").lower() for c in channels if isinstance(c, str))
    return list(dict.fromkeys(c for c in cleaned if c))


class ChatConfig(BaseModel):
    """Settings for one chat session.

    Attributes:
        username: Twitch login used for NICK.
        token: OAuth token used for PASS (normalized to ``oauth:...``).
        channels: Channels joined once the connection is ready.
        host: IRC server host.
        port: IRC server TLS port.
        reconnect: Whether the runner starts a new session after a
            server RECONNECT notice. Fatal read errors always end the run.
    """

    username: str = Field(min_length=1, max_length=25)
    token: str = Field(min_length=1)
    channels: list[str] = Field(default_factory=list)
    host: str = TWITCH_IRC_HOST
    port: int = Field(default=TWITCH_IRC_PORT, gt=0, lt=65536)
    reconnect: bool = True

    @field_validator("username", mode="before")
    @classmethod
    def validate_username(cls, v: Any) -> str:
        if not isinstance(v, str):
            raise ValueError("username must be a string")
        return v.strip().lower()

    @field_validator("token", mode="before")
    @classmethod
    def validate_token(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("token must be a non-empty string")
        return normalize_token(v)

    @field_validator("channels", mode="before")
    @classmethod
    def validate_channels(cls, v: Any) -> list[str]:
        if isinstance(v, str):
            v = v.split(",")
        if not isinstance(v, list):
            raise ValueError("channels must be a list or comma separated string")
        return normalize_channels(v)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ChatConfig:
        """Validate ``data`` and raise :class:`ConfigError` on failure."""
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
            raise ConfigError(
                f"Invalid configuration: {', '.join(fields) or 'unknown field'}",
                data={"fields": fields},
            ) from e

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ChatConfig:
        """Build a config from ``TWITCH_*`` environment variables."""
        env = os.environ if environ is None else environ
        data: dict[str, Any] = {
            "username": env.get("TWITCH_USERNAME", ""),
            "token": env.get("TWITCH_TOKEN", ""),
            "channels": env.get("TWITCH_CHANNELS", ""),
        }
        if env.get("TWITCH_IRC_HOST"):
            data["host"] = env["TWITCH_IRC_HOST"]
        if env.get("TWITCH_IRC_PORT"):
            data["port"] = env["TWITCH_IRC_PORT"]
        if "TWITCH_RECONNECT" in env:
            data["reconnect"] = env["TWITCH_RECONNECT"].lower() in ("true", "1", "yes")
        return cls.from_mapping(data)

    def summary(self) -> dict[str, Any]:
        """Loggable view of the config (token masked)."""
        return {
            "username": self.username,
            "channels": list(self.channels),
            "server": f"{self.host}:{self.port}",
            "reconnect": self.reconnect,
        }
