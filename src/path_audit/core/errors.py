"""Errors that abort a scan before traversal begins."""

from __future__ import annotations


class ScanSetupError(ValueError):
    """Invalid configuration or an unusable root path.

    Raised before any traversal; no partial result is produced.
    """
