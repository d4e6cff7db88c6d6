"""Canonical JSON serialization — single dump path for CLI and API output.

Guarantees:
  - Stable key ordering (``sort_keys=True``)
  - Trailing newline at EOF
  - ``Path`` objects → POSIX strings
  - Enums → their values
  - Surrogate-escaped path bytes → ``\\xNN`` text (output is always valid UTF-8)
  - Dataclasses → dicts (via their ``to_dict`` or ``dataclasses.asdict``)
"""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from enum import Enum
from pathlib import Path
from typing import IO, Any, Mapping

from path_audit.utils.display import display_path


def _to_builtin(obj: Any) -> Any:
    """Convert common non-JSON types into JSON-safe builtins."""
    if obj is None or isinstance(obj, (bool, int, float)):
        return obj
    if isinstance(obj, Enum):
        return _to_builtin(obj.value)
    if isinstance(obj, str):
        return display_path(obj)
    if isinstance(obj, Path):
        return display_path(obj.as_posix())
    if is_dataclass(obj) and not isinstance(obj, type):
        to_dict = getattr(obj, "to_dict", None)
        return _to_builtin(to_dict() if callable(to_dict) else asdict(obj))
    if isinstance(obj, Mapping):
        return {str(k): _to_builtin(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [_to_builtin(v) for v in obj]
    # Fall back to string (keeps CLI resilient)
    return str(obj)


def stable_json_dumps(obj: Any, *, indent: int | None = 2) -> str:
    """Serialize *obj* with sorted keys and a trailing newline."""
    s = json.dumps(
        _to_builtin(obj),
        indent=indent,
        sort_keys=True,
        ensure_ascii=False,
    )
    return s + "\n"


def stable_json_dump(obj: Any, fp: IO[str], *, indent: int | None = 2) -> None:
    fp.write(stable_json_dumps(obj, indent=indent))
