"""Worker pool coordinator — dispatch batches, collect per-batch results.

Each batch is filtered by one execution unit into its own list; nothing is
shared between units.  Results are merged by the caller only after
:meth:`WorkerPoolCoordinator.join` returns.
"""

from __future__ import annotations

import functools
import logging
from concurrent.futures import Future, as_completed
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from path_audit.analyzers.path_length import filter_batch
from path_audit.core.diagnostics import (
    BATCH_FAILED,
    DiagnosticEvent,
    DiagnosticObserver,
    LoggingObserver,
)
from path_audit.model.entry import Entry
from path_audit.model.violation import Violation
from path_audit.parallel.executor_strategy import ExecutorStrategy

logger = logging.getLogger(__name__)

# (batches_done, batches_total, entries_done)
ProgressCallback = Callable[[int, int, int], None]


@dataclass
class BatchResult:
    """Outcome of one batch.

    A failed batch has ``success=False``, the raised ``error``, and no
    violations.
    """

    batch_id: int
    size: int
    success: bool
    violations: list[Violation] = field(default_factory=list)
    error: BaseException | None = None


def _batch_label(batch: Sequence[Any]) -> str:
    if not batch:
        return ""
    first = batch[0]
    return first.path if isinstance(first, Entry) else str(first)


class WorkerPoolCoordinator:
    """Owns an :class:`ExecutorStrategy` for the duration of one scan.

    Use as a context manager; the pool is shut down on exit whether or not
    any batch failed::

        with WorkerPoolCoordinator(ThreadPoolStrategy(4), max_length=260) as pool:
            pool.submit_all(batches)
            results = pool.join()

    Args:
        strategy: Pool to run batches on; its ``max_workers`` is the
            throttle limit.
        max_length: Threshold handed to the length filter.
        observer: Receives a ``batch_failed`` event per failed batch.
        on_batch_complete: Progress hook, called from the joining thread as
            each batch finishes (successfully or not).
        work: Override the per-batch function (defaults to
            :func:`filter_batch` bound to *max_length*).
    """

    def __init__(
        self,
        strategy: ExecutorStrategy,
        max_length: int,
        *,
        observer: DiagnosticObserver | None = None,
        on_batch_complete: ProgressCallback | None = None,
        work: Callable[[list[Any]], list[Violation]] | None = None,
    ):
        self.strategy = strategy
        self.max_length = max_length
        self.observer = observer if observer is not None else LoggingObserver()
        self.on_batch_complete = on_batch_complete
        self._work = work if work is not None else functools.partial(
            filter_batch, max_length=max_length
        )
        self._pending: dict[Future, tuple[int, int, str]] = {}
        self._next_id = 0
        self._closed = False

    @property
    def throttle_limit(self) -> int:
        return self.strategy.max_workers

    @property
    def pending(self) -> int:
        """Batches submitted but not yet joined."""
        return len(self._pending)

    # ── dispatch ────────────────────────────────────────────────────

    def submit(self, batch: list[Any]) -> int:
        """Queue one batch and return its id.  Does not wait for it."""
        if self._closed:
            raise RuntimeError("coordinator is closed")
        batch_id = self._next_id
        self._next_id += 1
        future = self.strategy.submit(self._work, batch)
        self._pending[future] = (batch_id, len(batch), _batch_label(batch))
        return batch_id

    def submit_all(self, batches: Sequence[list[Any]]) -> list[int]:
        return [self.submit(b) for b in batches]

    # ── collection ──────────────────────────────────────────────────

    def join(self) -> list[BatchResult]:
        """Wait for every submitted batch and return results in completion order."""
        pending, self._pending = self._pending, {}
        total = len(pending)
        results: list[BatchResult] = []
        entries_done = 0

        for future in as_completed(pending):
            batch_id, size, label = pending[future]
            try:
                violations = future.result()
                result = BatchResult(batch_id, size, True, list(violations))
            except Exception as exc:
                logger.exception(
                    "Batch %d (%d entries) raised an exception — skipped",
                    batch_id,
                    size,
                )
                self.observer.notify(
                    DiagnosticEvent(
                        path=label,
                        kind=BATCH_FAILED,
                        message=f"batch {batch_id}: {type(exc).__name__}: {exc}",
                    )
                )
                result = BatchResult(batch_id, size, False, error=exc)

            results.append(result)
            entries_done += size
            if self.on_batch_complete is not None:
                self.on_batch_complete(len(results), total, entries_done)

        return results

    def run(self, batches: Sequence[list[Any]]) -> list[BatchResult]:
        """Submit *batches* and join them."""
        self.submit_all(batches)
        return self.join()

    # ── lifecycle ───────────────────────────────────────────────────

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        # Anything still queued at this point is abandoned by an exception.
        self.strategy.shutdown(wait=True, cancel_futures=bool(self._pending))
        self._pending.clear()

    def __enter__(self) -> WorkerPoolCoordinator:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
