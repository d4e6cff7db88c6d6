"""Path length analyzer — flags entries whose full path is too long."""

from __future__ import annotations

import os
from typing import Iterable

from path_audit.model.entry import Entry
from path_audit.model.violation import Violation

# Length is counted in Unicode code points (``len(str)``), for every path
# and every enumeration strategy alike.


def check_path(path: str, max_length: int) -> Violation | None:
    """Return a :class:`Violation` if *path* is longer than *max_length*."""
    length = len(path)
    if length <= max_length:
        return None
    return Violation(
        path=path,
        length=length,
        excess=length - max_length,
        name=os.path.basename(path),
        parent=os.path.dirname(path),
    )


def check_entry(entry: Entry, max_length: int) -> Violation | None:
    """Like :func:`check_path`, carrying the entry's kind and size along."""
    length = len(entry.path)
    if length <= max_length:
        return None
    return Violation(
        path=entry.path,
        length=length,
        excess=length - max_length,
        name=os.path.basename(entry.path),
        parent=os.path.dirname(entry.path),
        kind=entry.kind,
        size=entry.size,
    )


def filter_batch(batch: Iterable[Entry | str], max_length: int) -> list[Violation]:
    """Apply the length filter to every item of *batch*, preserving order.

    This is the unit of work handed to pool workers, so it lives at module
    level where process pools can pickle it.
    """
    violations: list[Violation] = []
    for item in batch:
        if isinstance(item, Entry):
            v = check_entry(item, max_length)
        else:
            v = check_path(item, max_length)
        if v is not None:
            violations.append(v)
    return violations


class PathLengthAnalyzer:
    """Finds filesystem entries whose fully-qualified path exceeds a limit."""

    id: str = "path_length"
    version: str = "1.0.0"

    def __init__(self, max_length: int):
        self.max_length = max_length

    def check(self, item: Entry | str) -> Violation | None:
        if isinstance(item, Entry):
            return check_entry(item, self.max_length)
        return check_path(item, self.max_length)

    def run(self, entries: Iterable[Entry | str]) -> list[Violation]:
        return filter_batch(entries, self.max_length)
