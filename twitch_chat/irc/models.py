"""Shared IRC data models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class ConnectionState(Enum):
    IDLE = auto()
    CONNECTING = auto()
    AUTHENTICATING = auto()
    RUNNING = auto()
    CLOSING = auto()
    CLOSED = auto()


@dataclass(slots=True)
class Credentials:
    username: str
    password: str

    def is_complete(self) -> bool:
        return bool(self.username and self.username.strip()) and bool(
            self.password and self.password.strip()
        )


@dataclass(frozen=True, slots=True)
class ChatMessage:
    sender: str
    message: str
    channel: str


@dataclass(frozen=True, slots=True)
class StatusEvent:
    is_error: bool
    status_key: str
    raw_detail: str = ""
