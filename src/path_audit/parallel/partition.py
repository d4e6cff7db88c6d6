"""Batch partitioning of a materialized entry list."""

from __future__ import annotations

from typing import Sequence, TypeVar

T = TypeVar("T")


def partition(items: Sequence[T], batch_size: int) -> list[list[T]]:
    """Split *items* into contiguous batches of *batch_size*, in index order.

    The last batch may be shorter.  Concatenating the batches gives back
    *items* exactly; an empty input gives no batches.
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")
    return [list(items[i : i + batch_size]) for i in range(0, len(items), batch_size)]
