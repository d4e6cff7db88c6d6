"""Multi-format exporters for scan results.

Supports:

*  **CSV** — one row per violation, UTF-8, header row, for spreadsheets.
*  **JSON** — machine-readable, the ``scan_result_v1`` contract.
*  **Markdown** — human-readable, suitable for PR comments or tickets.

Every column is already computed on the :class:`Violation`; exporters only
format.  Rows are written longest path first.
"""

from __future__ import annotations

import csv
import io
from datetime import datetime, timezone
from pathlib import Path

from path_audit.model.scan_result import ScanResult
from path_audit.model.violation import CSV_FIELDS
from path_audit.utils.display import display_path
from path_audit.utils.json_norm import stable_json_dumps


# ════════════════════════════════════════════════════════════════════
# CSV exporter
# ════════════════════════════════════════════════════════════════════


def render_csv(result: ScanResult) -> str:
    """Return the CSV document as a string."""
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=list(CSV_FIELDS), lineterminator="\n")
    writer.writeheader()
    for v in result.sorted_violations():
        writer.writerow(v.to_row())
    return buf.getvalue()


def export_csv(result: ScanResult, path: Path) -> Path:
    """Write the violations to *path* as UTF-8 CSV.

    Undecodable filename bytes are written back unchanged.  Raises
    ``OSError`` if the file cannot be written; the caller decides whether
    that is fatal.
    """
    path = Path(path)
    with path.open("w", encoding="utf-8", errors="surrogateescape", newline="") as fh:
        fh.write(render_csv(result))
    return path


# ════════════════════════════════════════════════════════════════════
# JSON exporter
# ════════════════════════════════════════════════════════════════════


def export_json(result: ScanResult, *, indent: int = 2) -> str:
    """Export a ``ScanResult`` as indented JSON."""
    return stable_json_dumps(result.to_dict(), indent=indent)


# ════════════════════════════════════════════════════════════════════
# Markdown exporter
# ════════════════════════════════════════════════════════════════════


def _md_escape(text: str) -> str:
    return display_path(text).replace("|", "\\|")


def export_markdown(result: ScanResult, *, top_n: int = 20) -> str:
    """Export a ``ScanResult`` as a concise Markdown summary."""
    lines: list[str] = []
    now = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    max_length = result.config.get("max_length", "?")

    lines.append("# Path Length Report")
    lines.append("")
    lines.append(f"**Generated:** {now}  ")
    lines.append(f"**Root:** `{display_path(str(result.config.get('root', '')))}`  ")
    lines.append(f"**Max length:** {max_length}  ")
    lines.append(f"**Entries scanned:** {result.entries_scanned}  ")
    lines.append(f"**Too long:** {result.summary.count}")
    if result.summary.longest is not None:
        lines.append(f"**Longest:** {result.summary.longest}")
    lines.append("")

    top = result.sorted_violations()[:top_n]
    if top:
        lines.append(f"## Top {len(top)} Paths")
        lines.append("")
        lines.append("| Type | Length | Excess | Path |")
        lines.append("|------|-------:|-------:|------|")
        for v in top:
            kind = v.kind.value if v.kind is not None else ""
            lines.append(f"| {kind} | {v.length} | +{v.excess} | `{_md_escape(v.path)}` |")
        lines.append("")

    if result.diagnostics:
        lines.append(f"_{len(result.diagnostics)} location(s) could not be read and were skipped._")
        lines.append("")

    lines.append("---")
    lines.append(f"*Exported by path-audit {result.tool_version}*")
    lines.append("")
    return "\n".join(lines)
