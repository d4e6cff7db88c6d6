"""Centralized exit-code contract for the CLI.

Code  Meaning
----  -------
  0   Success — no over-length paths found
  1   Violation — at least one path exceeds the maximum length
  2   Error — usage error, missing root, invalid configuration
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    VIOLATION = 1
    ERROR = 2
