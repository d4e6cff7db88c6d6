"""Scan configuration dataclass."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from path_audit.core.errors import ScanSetupError

DEFAULT_MAX_LENGTH = 260    # classic Windows MAX_PATH
DEFAULT_BATCH_SIZE = 1000
EXECUTORS = ("process", "thread")


def default_throttle_limit() -> int:
    """Host's available parallelism (at least 1)."""
    return os.cpu_count() or 1


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class ScanConfig:
    """Immutable scan configuration.

    ``executor`` only matters when ``use_parallel`` is set: ``"process"``
    runs batches in separate processes, ``"thread"`` in a thread pool.
    """

    root: Path
    max_length: int = DEFAULT_MAX_LENGTH
    use_parallel: bool = False
    throttle_limit: int = field(default_factory=default_throttle_limit)
    batch_size: int = DEFAULT_BATCH_SIZE
    executor: str = "process"

    def validate(self) -> None:
        """Raise :class:`ScanSetupError` if the scan cannot start."""
        if not _is_int(self.max_length) or self.max_length <= 0:
            raise ScanSetupError(f"max_length must be a positive integer, got {self.max_length!r}")
        if not _is_int(self.throttle_limit) or self.throttle_limit < 1:
            raise ScanSetupError(f"throttle_limit must be >= 1, got {self.throttle_limit!r}")
        if not _is_int(self.batch_size) or self.batch_size < 1:
            raise ScanSetupError(f"batch_size must be >= 1, got {self.batch_size!r}")
        if self.executor not in EXECUTORS:
            raise ScanSetupError(
                f"executor must be one of {', '.join(EXECUTORS)}, got {self.executor!r}"
            )
        root = Path(self.root)
        if not root.exists():
            raise ScanSetupError(f"root does not exist: {root}")
        if not root.is_dir():
            raise ScanSetupError(f"root is not a directory: {root}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": str(self.root),
            "max_length": self.max_length,
            "use_parallel": self.use_parallel,
            "throttle_limit": self.throttle_limit,
            "batch_size": self.batch_size,
            "executor": self.executor,
        }


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ScanSetupError(f"{name} must be an integer, got {raw!r}") from None


def defaults_from_env() -> dict[str, Any]:
    """Scan defaults, overridable with ``PATH_AUDIT_*`` environment variables."""
    return {
        "max_length": _env_int("PATH_AUDIT_MAX_LENGTH", DEFAULT_MAX_LENGTH),
        "batch_size": _env_int("PATH_AUDIT_BATCH_SIZE", DEFAULT_BATCH_SIZE),
        "throttle_limit": _env_int("PATH_AUDIT_THROTTLE_LIMIT", default_throttle_limit()),
        "executor": os.getenv("PATH_AUDIT_EXECUTOR", "") or "process",
    }
