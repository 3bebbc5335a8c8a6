"""Notification delivery for task mutation outcomes.

The caches only need something that satisfies ``Notifier``. ``ToastQueue`` keeps
timed notifications in memory for a presentation layer to render;
``LoggingNotifier`` routes them to the log for headless use.
"""

import logging
import time
from enum import StrEnum
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from tasktree.core.config import Constants, settings
from tasktree.core.observable import StateHolder


logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Fire-and-forget sink for user-facing messages."""

    def success(self, message: str, duration: int | None = None) -> object: ...

    def error(self, message: str, duration: int | None = None) -> object: ...

    def info(self, message: str, duration: int | None = None) -> object: ...


class ToastKind(StrEnum):
    """Notification severity."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class Toast(BaseModel):
    """A single timed notification."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Queue-local identifier")
    kind: ToastKind = Field(..., description="success, error or info")
    message: str = Field(..., description="Text shown to the user")
    duration_ms: int = Field(..., description="Display duration; 0 keeps the toast until removed")
    created_at: float = Field(..., description="Monotonic timestamp when the toast was added")

    def is_expired(self, now: float) -> bool:
        """Return True once the display duration has elapsed."""
        if self.duration_ms <= 0:
            return False
        return now - self.created_at >= self.duration_ms / 1000


class ToastQueue(StateHolder[tuple[Toast, ...]]):
    """In-memory notifier holding toasts until they expire or are removed."""

    def __init__(self) -> None:
        """Initialize an empty queue."""
        super().__init__(())
        self._next_id = Constants.TOAST_ID_START

    def _add(self, kind: ToastKind, message: str, duration: int | None) -> int:
        toast = Toast(
            id=self._next_id,
            kind=kind,
            message=message,
            duration_ms=duration if duration is not None else self._default_duration(kind),
            created_at=time.monotonic(),
        )
        self._next_id += 1
        self._set_state((*self.state, toast))
        logger.debug("Toast added", extra={"toast_id": toast.id, "kind": kind.value})
        return toast.id

    @staticmethod
    def _default_duration(kind: ToastKind) -> int:
        if kind == ToastKind.ERROR:
            return settings.error_toast_duration_ms
        return settings.toast_duration_ms

    def success(self, message: str, duration: int | None = None) -> int:
        return self._add(ToastKind.SUCCESS, message, duration)

    def error(self, message: str, duration: int | None = None) -> int:
        return self._add(ToastKind.ERROR, message, duration)

    def info(self, message: str, duration: int | None = None) -> int:
        return self._add(ToastKind.INFO, message, duration)

    def remove(self, toast_id: int) -> None:
        """Remove the toast with ``toast_id``; unknown ids are ignored."""
        remaining = tuple(toast for toast in self.state if toast.id != toast_id)
        if len(remaining) != len(self.state):
            self._set_state(remaining)

    def clear(self) -> None:
        """Remove every toast."""
        self._set_state(())

    def active(self, now: float | None = None) -> tuple[Toast, ...]:
        """Drop expired toasts and return the ones still visible.

        Args:
            now: Monotonic timestamp to evaluate expiry at (defaults to time.monotonic())
        """
        current = time.monotonic() if now is None else now
        remaining = tuple(toast for toast in self.state if not toast.is_expired(current))
        if len(remaining) != len(self.state):
            self._set_state(remaining)
        return remaining


class LoggingNotifier:
    """Notifier that writes messages to the log."""

    def success(self, message: str, duration: int | None = None) -> None:
        logger.info(message, extra={"notification": ToastKind.SUCCESS.value})

    def error(self, message: str, duration: int | None = None) -> None:
        logger.error(message, extra={"notification": ToastKind.ERROR.value})

    def info(self, message: str, duration: int | None = None) -> None:
        logger.info(message, extra={"notification": ToastKind.INFO.value})
