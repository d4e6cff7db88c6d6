"""Text table — a terminal-friendly view of the longest paths.

Pure stdlib, suitable for CI logs and ``less``.
"""

from __future__ import annotations

from path_audit.model.scan_result import ScanResult
from path_audit.utils.display import display_path

_HEADERS = ("Type", "Length", "Excess", "Path")


def _clip_left(text: str, width: int) -> str:
    """Keep the tail of *text*; the end of a long path is the useful part."""
    if len(text) <= width:
        return text
    if width <= 1:
        return text[-width:] if width > 0 else ""
    return "…" + text[-(width - 1):]


def render_table(result: ScanResult, *, top_n: int | None = 50, width: int = 120) -> str:
    """Render the violations of *result* as a fixed-width grid.

    Parameters
    ----------
    top_n:
        Show at most this many rows (``None`` for all).
    width:
        Maximum line width; long paths are clipped from the left.
    """
    rows = result.sorted_violations()
    hidden = 0
    if top_n is not None and len(rows) > top_n:
        hidden = len(rows) - top_n
        rows = rows[:top_n]

    lines: list[str] = []
    max_length = result.config.get("max_length", "?")
    lines.append("═" * width)
    lines.append(
        f"  PATH LENGTH AUDIT   max={max_length}   "
        f"scanned={result.entries_scanned}   too long={result.summary.count}"
    )
    lines.append("═" * width)

    if not rows:
        lines.append("  No paths exceed the maximum length.")
        lines.append("═" * width)
        return "\n".join(lines) + "\n"

    body = [
        (
            v.kind.value if v.kind is not None else "",
            str(v.length),
            f"+{v.excess}",
            display_path(v.path),
        )
        for v in rows
    ]
    w_type = max(len(_HEADERS[0]), *(len(r[0]) for r in body))
    w_len = max(len(_HEADERS[1]), *(len(r[1]) for r in body))
    w_exc = max(len(_HEADERS[2]), *(len(r[2]) for r in body))
    w_path = max(10, width - (w_type + w_len + w_exc + 8))

    def fmt(cols: tuple[str, str, str, str]) -> str:
        return (
            f"  {cols[0]:<{w_type}}  {cols[1]:>{w_len}}  {cols[2]:>{w_exc}}  "
            f"{_clip_left(cols[3], w_path)}"
        )

    lines.append(fmt(_HEADERS))
    lines.append("  " + "─" * (width - 2))
    lines.extend(fmt(r) for r in body)
    if hidden:
        lines.append(f"  … and {hidden} more")
    lines.append("─" * width)
    if result.summary.longest is not None:
        lines.append(f"  Longest path: {result.summary.longest} characters")
    if result.summary.by_kind:
        parts = [f"{k}={v}" for k, v in sorted(result.summary.by_kind.items())]
        lines.append(f"  By type     : {', '.join(parts)}")
    if result.diagnostics:
        lines.append(f"  Skipped     : {len(result.diagnostics)} unreadable location(s)")
    lines.append("═" * width)
    return "\n".join(lines) + "\n"
