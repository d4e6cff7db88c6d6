"""Throttled progress output for long scans.

Progress is informational only: the runner reports entries as batches
*complete*, and the final line is always printed, but nothing downstream
depends on these messages.
"""

from __future__ import annotations

import sys
import threading
import time
from dataclasses import dataclass
from typing import TextIO


@dataclass
class ProgressState:
    """Last reported position."""

    done: int = 0
    total: int = 0

    @property
    def percentage(self) -> int:
        if self.total == 0:
            return 100
        return int((self.done / self.total) * 100)


class ProgressReporter:
    """Writes ``Checked N/M entries (P%)`` lines, at most every ``throttle_ms``.

    Callable as ``reporter(done, total)`` so it can be passed straight to
    ``run_scan(on_progress=...)``.  Safe to call from several threads.

    Args:
        stream: Where to write (default ``sys.stderr``).
        throttle_ms: Minimum milliseconds between lines; the final update
            (``done == total``) and the first update are always written.
    """

    def __init__(self, stream: TextIO | None = None, throttle_ms: int = 250):
        self.stream = stream if stream is not None else sys.stderr
        self.throttle_ms = throttle_ms
        self._state = ProgressState()
        self._last_update: float | None = None
        self._lock = threading.Lock()
        self.lines_written = 0

    def __call__(self, done: int, total: int) -> None:
        with self._lock:
            self._state.done = done
            self._state.total = total
            now = time.monotonic() * 1000
            if (
                self._last_update is None
                or done >= total
                or now - self._last_update >= self.throttle_ms
            ):
                self._write()
                self._last_update = now

    def _write(self) -> None:
        """Must be called while holding ``_lock``."""
        s = self._state
        print(f"Checked {s.done}/{s.total} entries ({s.percentage}%)", file=self.stream)
        self.lines_written += 1

    @property
    def done(self) -> int:
        with self._lock:
            return self._state.done
