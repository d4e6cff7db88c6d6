"""Result aggregation — merge per-batch violation lists and summarise them."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable

from path_audit.model.violation import Violation
from path_audit.parallel.coordinator import BatchResult


@dataclass(frozen=True)
class Summary:
    """Summary statistics over a violation collection."""

    count: int = 0
    longest: int | None = None      # None when there are no violations
    by_kind: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "violations_total": self.count,
            "longest": self.longest,
            "by_kind": dict(sorted(self.by_kind.items())),
        }


def merge_batches(results: Iterable[BatchResult]) -> list[Violation]:
    """Concatenate every batch's violations.

    Batches are disjoint, so no de-duplication happens.  Order across
    batches is whatever *results* yields; order inside a batch is kept.
    """
    merged: list[Violation] = []
    for r in results:
        merged.extend(r.violations)
    return merged


def summarize(violations: Iterable[Violation]) -> Summary:
    count = 0
    longest: int | None = None
    kinds: Counter[str] = Counter()
    for v in violations:
        count += 1
        if longest is None or v.length > longest:
            longest = v.length
        if v.kind is not None:
            kinds[v.kind.value] += 1
    return Summary(count=count, longest=longest, by_kind=dict(kinds))
