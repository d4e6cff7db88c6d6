"""Analyzers turn enumerated entries into violations.

Available analyzers:
    - PathLengthAnalyzer: flags entries whose full path exceeds a maximum length
"""

from __future__ import annotations

from path_audit.analyzers.path_length import (  # noqa: F401
    PathLengthAnalyzer,
    check_entry,
    check_path,
    filter_batch,
)

__all__ = ["PathLengthAnalyzer", "check_entry", "check_path", "filter_batch"]
