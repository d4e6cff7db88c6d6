"""Enums shared across the enumerator, filter and report layers."""

from __future__ import annotations

from enum import Enum


class EntryKind(str, Enum):
    """What a filesystem entry is, as seen during traversal."""

    FILE = "File"
    FOLDER = "Folder"


class ScanState(str, Enum):
    """Scan lifecycle states."""

    IDLE = "idle"
    ENUMERATING = "enumerating"
    FILTERING = "filtering"
    PARTITIONING = "partitioning"
    DISPATCHING = "dispatching"
    COLLECTING = "collecting"
    AGGREGATED = "aggregated"
    DONE = "done"
    FAILED = "failed"
