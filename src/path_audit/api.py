"""
path_audit.api
==============

Programmatic entrypoint for using path_audit as a backend engine.

Goals:
  - No argparse / CLI dependencies
  - Deterministic mode support (ci_mode=True)
  - Output validated against ``scan_result.schema.json``

Usage::

    from path_audit.api import scan_path

    result, result_dict = scan_path("/data", max_length=200, use_parallel=True)
"""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Any, Optional

from path_audit.contracts.load import validate_instance
from path_audit.core.config import ScanConfig, defaults_from_env
from path_audit.core.diagnostics import DiagnosticObserver
from path_audit.core.runner import ProgressCallback, run_scan
from path_audit.model.scan_result import ScanResult

# Fixed values for deterministic mode.
_DETERMINISTIC_TIMESTAMP = "2000-01-01T00:00:00+00:00"
_DETERMINISTIC_RUN_ID = "00000000-0000-0000-0000-000000000000"

SCHEMA_NAME = "scan_result.schema.json"


def _to_path(p: str | Path) -> Path:
    return p if isinstance(p, Path) else Path(p)


def build_config(
    root: str | Path,
    *,
    max_length: Optional[int] = None,
    use_parallel: bool = False,
    throttle_limit: Optional[int] = None,
    batch_size: Optional[int] = None,
    executor: Optional[str] = None,
) -> ScanConfig:
    """Build a :class:`ScanConfig`, filling unset values from the environment."""
    defaults = defaults_from_env()
    return ScanConfig(
        root=_to_path(root).resolve(),
        max_length=defaults["max_length"] if max_length is None else max_length,
        use_parallel=use_parallel,
        throttle_limit=defaults["throttle_limit"] if throttle_limit is None else throttle_limit,
        batch_size=defaults["batch_size"] if batch_size is None else batch_size,
        executor=defaults["executor"] if executor is None else executor,
    )


def make_deterministic(result: ScanResult) -> None:
    """Pin run id and timestamps so two runs over the same tree compare equal."""
    result.run_id = _DETERMINISTIC_RUN_ID
    result.created_at = _DETERMINISTIC_TIMESTAMP
    result.diagnostics = [
        dataclasses.replace(e, timestamp=_DETERMINISTIC_TIMESTAMP) for e in result.diagnostics
    ]


def scan_path(
    root: str | Path,
    *,
    max_length: Optional[int] = None,
    use_parallel: bool = False,
    throttle_limit: Optional[int] = None,
    batch_size: Optional[int] = None,
    executor: Optional[str] = None,
    ci_mode: bool = False,
    observer: Optional[DiagnosticObserver] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> tuple[ScanResult, dict[str, Any]]:
    """Run a path length scan programmatically.

    Parameters
    ----------
    root:
        Directory to scan.
    max_length:
        Longest allowed path, in characters.
    use_parallel:
        Filter entries in batches on a worker pool.
    ci_mode:
        If True, output is byte-deterministic (fixed run id and timestamps).

    Returns
    -------
    ``(ScanResult, scan_result_dict)``
        The dataclass and the schema-aligned JSON dict.

    Raises
    ------
    ScanSetupError
        If the root is missing or a setting is out of range.
    """
    config = build_config(
        root,
        max_length=max_length,
        use_parallel=use_parallel,
        throttle_limit=throttle_limit,
        batch_size=batch_size,
        executor=executor,
    )
    result = run_scan(config, observer=observer, on_progress=on_progress)
    if ci_mode:
        make_deterministic(result)

    result_dict = result.to_dict()
    validate_instance(result_dict, SCHEMA_NAME)
    return result, result_dict
