"""Execution strategies — how batches run, separated from what they do.

All strategies share one interface so the coordinator can run the same code
on a process pool (true parallelism), a thread pool, or synchronously in
tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor
from typing import Any, Callable

from path_audit.core.config import default_throttle_limit


class ExecutorStrategy(ABC):
    """Bounded pool of execution units.

    Attributes:
        max_workers: Upper bound on concurrently running units.
    """

    max_workers: int

    @abstractmethod
    def submit(self, fn: Callable[[Any], Any], item: Any) -> Future:
        """Schedule ``fn(item)``; extra submissions queue until a unit frees."""

    @abstractmethod
    def shutdown(self, wait: bool = True, cancel_futures: bool = False) -> None:
        """Release the pool."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown(wait=True)
        return False


class _PoolStrategy(ExecutorStrategy):
    _executor_cls: type[Executor]

    def __init__(self, max_workers: int | None = None):
        if max_workers is None:
            max_workers = default_throttle_limit()
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self.max_workers = max_workers
        self._executor = self._executor_cls(max_workers=max_workers)

    def submit(self, fn: Callable[[Any], Any], item: Any) -> Future:
        return self._executor.submit(fn, item)

    def shutdown(self, wait: bool = True, cancel_futures: bool = False) -> None:
        self._executor.shutdown(wait=wait, cancel_futures=cancel_futures)


class ProcessPoolStrategy(_PoolStrategy):
    """Runs each unit in a worker process.

    ``fn`` and ``item`` must be picklable: use module-level functions (or
    ``functools.partial`` of them) and plain data.
    """

    _executor_cls = ProcessPoolExecutor


class ThreadPoolStrategy(_PoolStrategy):
    """Runs each unit in a worker thread of this process."""

    _executor_cls = ThreadPoolExecutor


class SequentialStrategy(ExecutorStrategy):
    """Runs each unit immediately on submit; for tests and debugging."""

    def __init__(self):
        self.max_workers = 1

    def submit(self, fn: Callable[[Any], Any], item: Any) -> Future:
        future: Future = Future()
        try:
            future.set_result(fn(item))
        except Exception as e:
            future.set_exception(e)
        return future

    def shutdown(self, wait: bool = True, cancel_futures: bool = False) -> None:
        pass


def make_strategy(kind: str, max_workers: int) -> ExecutorStrategy:
    """Build a strategy by name: ``process``, ``thread`` or ``sequential``."""
    if kind == "process":
        return ProcessPoolStrategy(max_workers)
    if kind == "thread":
        return ThreadPoolStrategy(max_workers)
    if kind == "sequential":
        return SequentialStrategy()
    raise ValueError(f"unknown executor kind: {kind!r}")
