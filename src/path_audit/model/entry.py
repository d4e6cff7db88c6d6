"""Entry — one filesystem object produced during traversal."""

from __future__ import annotations

from dataclasses import dataclass

from . import EntryKind


@dataclass(frozen=True, slots=True)
class Entry:
    """Fully-qualified path of a file or folder.

    ``kind`` and ``size`` are only filled in by ``iter_entries()``;
    ``size`` is ``None`` for folders and for files that could not be stat'ed.
    """

    path: str
    kind: EntryKind | None = None
    size: int | None = None
