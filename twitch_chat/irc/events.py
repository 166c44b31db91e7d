"""Observer-style event streams for chat and status notifications."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

from ..logs.logger import logger

T = TypeVar("T")


class EventStream(Generic[T]):
    """Ordered list of listeners invoked synchronously on ``emit``.

    A listener that raises is logged and skipped; the remaining listeners
    still receive the event and the caller never sees the exception.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._listeners: list[Callable[[T], object]] = []

    def subscribe(self, listener: Callable[[T], object]) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            self.unsubscribe(listener)

        return _unsubscribe

    def unsubscribe(self, listener: Callable[[T], object]) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def __len__(self) -> int:
        return len(self._listeners)

    def emit(self, event: T) -> None:
        # Snapshot so listeners may unsubscribe themselves while being called.
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:  # noqa: BLE001
                logger.log_event(
                    "events",
                    "listener_error",
                    level=logging.ERROR,
                    stream=self.name,
                    listener=getattr(listener, "__qualname__", repr(listener)),
                    error=str(e),
                    error_type=type(e).__name__,
                )
