"""Report renderers: CSV / JSON / Markdown exporters, text table, progress."""

from __future__ import annotations

from path_audit.reports.exporters import (  # noqa: F401
    export_csv,
    export_json,
    export_markdown,
    render_csv,
)
from path_audit.reports.progress import ProgressReporter  # noqa: F401
from path_audit.reports.table import render_table  # noqa: F401

__all__ = [
    "export_csv",
    "export_json",
    "export_markdown",
    "render_csv",
    "render_table",
    "ProgressReporter",
]
