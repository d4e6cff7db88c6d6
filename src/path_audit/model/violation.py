"""Violation — an entry whose path is longer than the configured maximum."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from path_audit.utils.display import display_path

from . import EntryKind

# Column order for tabular exports.
CSV_FIELDS: tuple[str, ...] = (
    "Type",
    "Path",
    "Length",
    "Excess",
    "Name",
    "Parent",
    "Size",
)


@dataclass(frozen=True, slots=True)
class Violation:
    """Immutable over-length record.

    Every derived field (``excess``, ``name``, ``parent``) is computed by the
    length filter so exporters never have to.
    """

    path: str
    length: int
    excess: int
    name: str = ""
    parent: str = ""
    kind: EntryKind | None = None
    size: int | None = None

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe dict; undecodable bytes in paths become ``\\xNN``."""
        d: dict[str, Any] = {
            "path": display_path(self.path),
            "length": self.length,
            "excess": self.excess,
            "name": display_path(self.name),
            "parent": display_path(self.parent),
        }
        if self.kind is not None:
            d["kind"] = self.kind.value
        if self.size is not None:
            d["size"] = self.size
        return d

    def to_row(self) -> dict[str, Any]:
        """Flat row keyed by :data:`CSV_FIELDS`; paths are left as enumerated."""
        return {
            "Type": self.kind.value if self.kind is not None else "",
            "Path": self.path,
            "Length": self.length,
            "Excess": self.excess,
            "Name": self.name,
            "Parent": self.parent,
            "Size": "" if self.size is None else self.size,
        }
