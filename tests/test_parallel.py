"""
Tests for the parallel batch module.

Tests cover:
- ExecutorStrategy implementations (ProcessPool, ThreadPool, Sequential)
- partition
- WorkerPoolCoordinator: bounded concurrency, failure isolation, cleanup
"""

import math
import threading
import time

import pytest

from path_audit.core.diagnostics import BATCH_FAILED, CollectingObserver
from path_audit.model import EntryKind
from path_audit.model.entry import Entry
from path_audit.parallel import (
    BatchResult,
    ProcessPoolStrategy,
    SequentialStrategy,
    ThreadPoolStrategy,
    WorkerPoolCoordinator,
    make_strategy,
    partition,
)


def _entries(n: int) -> list[Entry]:
    return [Entry("/data/" + "x" * i, EntryKind.FILE, i) for i in range(n)]


class TestPartition:
    """partition splits an indexable collection into contiguous batches."""

    @pytest.mark.parametrize("n,size", [(10, 3), (9, 3), (1, 1), (7, 100), (1000, 7)])
    def test_batch_count_and_reconstruction(self, n, size):
        items = list(range(n))
        batches = partition(items, size)
        assert len(batches) == math.ceil(n / size)
        assert all(len(b) == size for b in batches[:-1])
        assert 1 <= len(batches[-1]) <= size
        assert [x for b in batches for x in b] == items

    def test_batch_size_at_least_total_gives_one_batch(self):
        items = list(range(5))
        assert partition(items, 5) == [items]
        assert partition(items, 50) == [items]

    def test_empty_input_gives_no_batches(self):
        assert partition([], 10) == []

    @pytest.mark.parametrize("size", [0, -1])
    def test_rejects_non_positive_batch_size(self, size):
        with pytest.raises(ValueError, match="batch_size"):
            partition([1, 2, 3], size)

    def test_batches_are_copies(self):
        items = [1, 2, 3, 4]
        batches = partition(items, 2)
        batches[0].append(99)
        assert items == [1, 2, 3, 4]


class TestStrategies:
    def test_sequential_submit_returns_completed_future(self):
        future = SequentialStrategy().submit(lambda x: x + 10, 5)
        assert future.done()
        assert future.result() == 15

    def test_sequential_submit_captures_exceptions(self):
        def raise_error(x):
            raise ValueError("Test error")

        future = SequentialStrategy().submit(raise_error, 1)
        with pytest.raises(ValueError, match="Test error"):
            future.result()

    def test_sequential_max_workers_is_one(self):
        assert SequentialStrategy().max_workers == 1

    def test_threadpool_custom_max_workers(self):
        with ThreadPoolStrategy(max_workers=3) as strategy:
            assert strategy.max_workers == 3
            assert strategy.submit(lambda x: x * 2, 21).result(timeout=5) == 42

    def test_pool_rejects_zero_workers(self):
        with pytest.raises(ValueError):
            ThreadPoolStrategy(max_workers=0)

    def test_processpool_runs_module_level_function(self):
        with ProcessPoolStrategy(max_workers=2) as strategy:
            assert strategy.submit(abs, -7).result(timeout=60) == 7

    def test_make_strategy(self):
        assert isinstance(make_strategy("sequential", 4), SequentialStrategy)
        thread = make_strategy("thread", 2)
        try:
            assert isinstance(thread, ThreadPoolStrategy)
            assert thread.max_workers == 2
        finally:
            thread.shutdown()
        with pytest.raises(ValueError, match="unknown executor"):
            make_strategy("gpu", 1)


class _RecordingStrategy(SequentialStrategy):
    """Sequential strategy that remembers shutdown calls."""

    def __init__(self):
        super().__init__()
        self.shutdowns = 0

    def shutdown(self, wait=True, cancel_futures=False):
        self.shutdowns += 1


class TestWorkerPoolCoordinator:
    def test_filters_every_batch(self):
        entries = _entries(30)
        batches = partition(entries, 4)
        with WorkerPoolCoordinator(ThreadPoolStrategy(3), max_length=20) as pool:
            results = pool.run(batches)

        assert len(results) == len(batches)
        assert all(isinstance(r, BatchResult) and r.success for r in results)
        flagged = sorted(v.path for r in results for v in r.violations)
        assert flagged == sorted(e.path for e in entries if len(e.path) > 20)

    def test_batch_internal_order_preserved(self):
        entries = _entries(12)
        with WorkerPoolCoordinator(SequentialStrategy(), max_length=0) as pool:
            results = pool.run(partition(entries, 5))
        by_id = {r.batch_id: r for r in results}
        assert [v.path for v in by_id[0].violations] == [e.path for e in entries[:5]]

    def test_more_batches_than_workers_are_queued(self):
        """Concurrency never exceeds the throttle limit."""
        lock = threading.Lock()
        active = 0
        peak = 0

        def slow_work(batch):
            nonlocal active, peak
            with lock:
                active += 1
                peak = max(peak, active)
            time.sleep(0.05)
            with lock:
                active -= 1
            return []

        with WorkerPoolCoordinator(ThreadPoolStrategy(2), max_length=1, work=slow_work) as pool:
            pool.submit_all([[i] for i in range(8)])
            assert pool.throttle_limit == 2
            results = pool.join()

        assert len(results) == 8
        assert peak <= 2

    def test_failed_batch_contributes_nothing(self):
        def work(batch):
            if "boom" in batch:
                raise RuntimeError("worker exploded")
            return [b for b in batch if b.startswith("keep")]

        observer = CollectingObserver()
        batches = [["keep-1", "drop"], ["boom", "keep-2"], ["keep-3"]]
        with WorkerPoolCoordinator(
            ThreadPoolStrategy(2), max_length=1, observer=observer, work=work
        ) as pool:
            results = pool.run(batches)

        by_id = {r.batch_id: r for r in results}
        assert by_id[1].success is False
        assert isinstance(by_id[1].error, RuntimeError)
        assert by_id[1].violations == []
        assert by_id[0].violations == ["keep-1"]
        assert by_id[2].violations == ["keep-3"]

        assert len(observer) == 1
        event = observer.events[0]
        assert event.kind == BATCH_FAILED
        assert event.path == "boom"
        assert "worker exploded" in event.message

    def test_progress_reported_on_completion(self):
        calls = []
        with WorkerPoolCoordinator(
            SequentialStrategy(),
            max_length=5,
            on_batch_complete=lambda done, total, entries: calls.append((done, total, entries)),
        ) as pool:
            pool.run(partition(_entries(10), 4))
        # Completion order is not fixed; counts are.
        assert [c[0] for c in calls] == [1, 2, 3]
        assert all(c[1] == 3 for c in calls)
        assert calls[-1][2] == 10
        assert [c[2] for c in calls] == sorted(c[2] for c in calls)

    def test_join_with_nothing_submitted(self):
        with WorkerPoolCoordinator(SequentialStrategy(), max_length=5) as pool:
            assert pool.join() == []

    def test_join_drains_pending(self):
        with WorkerPoolCoordinator(SequentialStrategy(), max_length=5) as pool:
            pool.submit(["/a/very/long/path"])
            assert pool.pending == 1
            assert len(pool.join()) == 1
            assert pool.pending == 0
            assert pool.join() == []

    def test_pool_released_on_success(self):
        strategy = _RecordingStrategy()
        with WorkerPoolCoordinator(strategy, max_length=5) as pool:
            pool.run([["/x"]])
        assert strategy.shutdowns == 1

    def test_pool_released_on_exception(self):
        strategy = _RecordingStrategy()
        with pytest.raises(KeyError):
            with WorkerPoolCoordinator(strategy, max_length=5) as pool:
                pool.submit(["/x"])
                raise KeyError("dispatch went wrong")
        assert strategy.shutdowns == 1

    def test_submit_after_close_rejected(self):
        pool = WorkerPoolCoordinator(SequentialStrategy(), max_length=5)
        pool.close()
        pool.close()
        with pytest.raises(RuntimeError, match="closed"):
            pool.submit(["/x"])

    def test_process_pool_end_to_end(self):
        entries = _entries(50)
        with WorkerPoolCoordinator(ProcessPoolStrategy(2), max_length=30) as pool:
            results = pool.run(partition(entries, 8))
        flagged = {v.path for r in results for v in r.violations}
        assert flagged == {e.path for e in entries if len(e.path) > 30}
        assert all(v.kind == EntryKind.FILE for r in results for v in r.violations)
