"""ScanResult — the assembled output of one scan."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from path_audit import __version__
from path_audit.core.aggregate import Summary
from path_audit.core.diagnostics import DiagnosticEvent
from path_audit.model import ScanState
from path_audit.model.violation import Violation
from path_audit.utils.display import display_path


@dataclass(slots=True)
class ScanResult:
    """Violations found under one root, plus run metadata.

    ``violations`` carries no ordering guarantee; :meth:`sorted_violations`
    gives the presentation order (longest first).
    """

    # ── run metadata ────────────────────────────────────────────────
    run_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
    )
    tool_version: str = __version__
    config: dict = field(default_factory=dict)

    # ── outcome ─────────────────────────────────────────────────────
    violations: list[Violation] = field(default_factory=list)
    summary: Summary = field(default_factory=Summary)
    entries_scanned: int = 0
    mode: str = "sequential"        # sequential | parallel
    batches: int = 0
    failed_batches: int = 0
    diagnostics: list[DiagnosticEvent] = field(default_factory=list)
    state: ScanState = ScanState.DONE

    def sorted_violations(self) -> list[Violation]:
        return sorted(self.violations, key=lambda v: (-v.length, v.path))

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """Produce the ``scan_result_v1`` JSON dict."""
        summary = self.summary.to_dict()
        summary.update(
            {
                "entries_scanned": self.entries_scanned,
                "mode": self.mode,
                "batches": self.batches,
                "failed_batches": self.failed_batches,
            }
        )
        diagnostics = sorted(self.diagnostics, key=lambda e: (e.kind, e.path))
        return {
            "schema_version": "scan_result_v1",
            "run": {
                "run_id": self.run_id,
                "created_at": self.created_at,
                "tool_version": self.tool_version,
                "config": {
                    k: display_path(v) if isinstance(v, str) else v
                    for k, v in self.config.items()
                },
            },
            "summary": summary,
            "violations": [v.to_dict() for v in self.sorted_violations()],
            "diagnostics": [e.to_dict() for e in diagnostics],
        }
