"""
Parallel batch processing for path scans.

Components:
    ExecutorStrategy - Interface for a bounded pool of execution units
    ProcessPoolStrategy - Process-based pool (true parallelism)
    ThreadPoolStrategy - Thread-based pool
    SequentialStrategy - Synchronous execution (testing/debugging)
    partition - Splits a materialized entry list into contiguous batches
    WorkerPoolCoordinator - Dispatches batches and joins their results
    BatchResult - Outcome of a single batch

Usage Example:
    from path_audit.parallel import ProcessPoolStrategy, WorkerPoolCoordinator, partition

    batches = partition(entries, 1000)
    with WorkerPoolCoordinator(ProcessPoolStrategy(4), max_length=260) as pool:
        results = pool.run(batches)
"""

from .executor_strategy import (
    ExecutorStrategy,
    ProcessPoolStrategy,
    SequentialStrategy,
    ThreadPoolStrategy,
    make_strategy,
)
from .partition import partition
from .coordinator import BatchResult, WorkerPoolCoordinator

__all__ = [
    # Strategies
    'ExecutorStrategy',
    'ProcessPoolStrategy',
    'ThreadPoolStrategy',
    'SequentialStrategy',
    'make_strategy',
    # Batching
    'partition',
    'WorkerPoolCoordinator',
    'BatchResult',
]
