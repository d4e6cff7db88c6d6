"""Structured diagnostic events for recoverable scan failures.

The enumerator and the worker pool never print or raise for a skipped
subtree or a failed batch.  They emit a :class:`DiagnosticEvent` to an
observer instead, and the caller decides what to do with it.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol

from path_audit.utils.display import display_path

logger = logging.getLogger(__name__)

# Event kinds.
ACCESS_DENIED = "access_denied"
IO_ERROR = "io_error"
BATCH_FAILED = "batch_failed"


def _now_iso_utc() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True, slots=True)
class DiagnosticEvent:
    """One recoverable failure: where it happened, what kind, and when."""

    path: str
    kind: str
    message: str
    timestamp: str = field(default_factory=_now_iso_utc)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": display_path(self.path),
            "kind": self.kind,
            "message": display_path(self.message),
            "timestamp": self.timestamp,
        }


def event_from_os_error(exc: OSError, path: str | None = None) -> DiagnosticEvent:
    """Classify an ``OSError`` raised while listing a directory."""
    where = path if path is not None else str(exc.filename or "")
    kind = ACCESS_DENIED if isinstance(exc, PermissionError) else IO_ERROR
    return DiagnosticEvent(path=where, kind=kind, message=exc.strerror or str(exc))


class DiagnosticObserver(Protocol):
    """Anything that accepts diagnostic events."""

    def notify(self, event: DiagnosticEvent) -> None: ...


class LoggingObserver:
    """Default observer: sends every event to the ``logging`` module."""

    def __init__(self, level: int = logging.DEBUG) -> None:
        self.level = level

    def notify(self, event: DiagnosticEvent) -> None:
        logger.log(self.level, "Skipped %s (%s): %s", event.path, event.kind, event.message)


class CollectingObserver:
    """Keeps events in memory and optionally forwards them.

    Safe to notify from several threads at once.
    """

    def __init__(self, forward: DiagnosticObserver | None = None) -> None:
        self._events: list[DiagnosticEvent] = []
        self._lock = threading.Lock()
        self._forward = forward

    def notify(self, event: DiagnosticEvent) -> None:
        with self._lock:
            self._events.append(event)
        if self._forward is not None:
            self._forward.notify(event)

    @property
    def events(self) -> list[DiagnosticEvent]:
        with self._lock:
            return list(self._events)

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
