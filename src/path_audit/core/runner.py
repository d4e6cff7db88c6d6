"""Runner — enumerates a tree, filters entries, builds a ScanResult."""

from __future__ import annotations

import logging
from typing import Callable

from path_audit.analyzers.path_length import check_entry
from path_audit.core.aggregate import merge_batches, summarize
from path_audit.core.config import ScanConfig
from path_audit.core.diagnostics import CollectingObserver, DiagnosticObserver, LoggingObserver
from path_audit.core.discover import Enumerator, select_enumerator
from path_audit.core.errors import ScanSetupError
from path_audit.model import ScanState
from path_audit.model.entry import Entry
from path_audit.model.scan_result import ScanResult
from path_audit.model.violation import Violation
from path_audit.parallel.coordinator import WorkerPoolCoordinator
from path_audit.parallel.executor_strategy import ExecutorStrategy, make_strategy
from path_audit.parallel.partition import partition

_logger = logging.getLogger(__name__)

# (entries_done, entries_total)
ProgressCallback = Callable[[int, int], None]

# Sequential path reports progress every this many entries.
_PROGRESS_EVERY = 1000

_TRANSITIONS: dict[ScanState, frozenset[ScanState]] = {
    ScanState.IDLE: frozenset({ScanState.ENUMERATING, ScanState.FAILED}),
    ScanState.ENUMERATING: frozenset({ScanState.FILTERING, ScanState.PARTITIONING}),
    ScanState.FILTERING: frozenset({ScanState.AGGREGATED}),
    ScanState.PARTITIONING: frozenset({ScanState.DISPATCHING}),
    ScanState.DISPATCHING: frozenset({ScanState.COLLECTING}),
    ScanState.COLLECTING: frozenset({ScanState.AGGREGATED}),
    ScanState.AGGREGATED: frozenset({ScanState.DONE}),
    ScanState.DONE: frozenset(),
    ScanState.FAILED: frozenset(),
}


class ScanLifecycle:
    """Tracks the scan state machine and rejects illegal transitions."""

    def __init__(self) -> None:
        self.state = ScanState.IDLE
        self.history: list[ScanState] = [ScanState.IDLE]

    def advance(self, new: ScanState) -> None:
        if new not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"illegal scan transition {self.state.value} -> {new.value}")
        _logger.debug("scan state %s -> %s", self.state.value, new.value)
        self.state = new
        self.history.append(new)


def _scan_sequential(
    entries: list[Entry],
    max_length: int,
    on_progress: ProgressCallback | None,
) -> list[Violation]:
    total = len(entries)
    violations: list[Violation] = []
    for i, entry in enumerate(entries, 1):
        v = check_entry(entry, max_length)
        if v is not None:
            violations.append(v)
        if on_progress is not None and (i % _PROGRESS_EVERY == 0 or i == total):
            on_progress(i, total)
    return violations


def run_scan(
    config: ScanConfig,
    *,
    observer: DiagnosticObserver | None = None,
    enumerator: Enumerator | None = None,
    strategy: ExecutorStrategy | None = None,
    on_progress: ProgressCallback | None = None,
    lifecycle: ScanLifecycle | None = None,
) -> ScanResult:
    """Scan ``config.root`` and return every over-length entry.

    Parameters
    ----------
    config:
        Validated here; a bad config raises :class:`ScanSetupError` before
        anything is enumerated.
    observer:
        Also receives every diagnostic event (default: log at DEBUG).
        Events are always attached to the returned result.
    enumerator:
        Override the capability-selected enumerator.  Its observer is
        swapped for the duration of enumeration and restored afterwards;
        events still reach the original one.
    strategy:
        Override the pool built from ``config.executor`` and
        ``config.throttle_limit`` (parallel mode only).  The runner shuts
        it down when done.
    on_progress:
        Informational ``(entries_done, entries_total)`` hook.
    """
    life = lifecycle if lifecycle is not None else ScanLifecycle()
    try:
        config.validate()
    except ScanSetupError:
        life.advance(ScanState.FAILED)
        raise

    if observer is None:
        observer = enumerator.observer if enumerator is not None else LoggingObserver()
    collector = CollectingObserver(forward=observer)
    if enumerator is None:
        walker = select_enumerator(collector)
        previous = collector
    else:
        walker = enumerator
        previous = walker.observer
        walker.observer = collector

    # ── 1. enumerate ────────────────────────────────────────────────
    life.advance(ScanState.ENUMERATING)
    try:
        entries = list(walker.iter_entries(config.root))
    finally:
        walker.observer = previous
    _logger.debug("Enumerated %d entries under %s (%s)", len(entries), config.root, walker.name)

    batches_total = 0
    failed = 0

    # ── 2. filter ───────────────────────────────────────────────────
    if not config.use_parallel:
        life.advance(ScanState.FILTERING)
        violations = _scan_sequential(entries, config.max_length, on_progress)
    else:
        life.advance(ScanState.PARTITIONING)
        batches = partition(entries, config.batch_size)
        batches_total = len(batches)

        life.advance(ScanState.DISPATCHING)
        results = []
        if batches or strategy is not None:
            pool = strategy if strategy is not None else make_strategy(
                config.executor, config.throttle_limit
            )
            total = len(entries)

            def _batch_done(_done: int, _total: int, entries_done: int) -> None:
                if on_progress is not None:
                    on_progress(entries_done, total)

            with WorkerPoolCoordinator(
                pool,
                config.max_length,
                observer=collector,
                on_batch_complete=_batch_done,
            ) as coordinator:
                coordinator.submit_all(batches)
                life.advance(ScanState.COLLECTING)
                results = coordinator.join()
        else:
            life.advance(ScanState.COLLECTING)

        failed = sum(1 for r in results if not r.success)
        violations = merge_batches(results)

    # ── 3. aggregate ────────────────────────────────────────────────
    life.advance(ScanState.AGGREGATED)
    summary = summarize(violations)
    result = ScanResult(
        config=config.to_dict(),
        violations=violations,
        summary=summary,
        entries_scanned=len(entries),
        mode="parallel" if config.use_parallel else "sequential",
        batches=batches_total,
        failed_batches=failed,
        diagnostics=collector.events,
    )
    life.advance(ScanState.DONE)
    result.state = life.state
    _logger.info(
        "Scanned %d entries under %s: %d over %d characters",
        len(entries),
        config.root,
        summary.count,
        config.max_length,
    )
    return result
