"""Shared fixtures: small directory trees with known shapes."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture()
def sample_tree(tmp_path: Path) -> Path:
    """A root with files, nested folders, and an empty folder.

    root/
      a.txt
      docs/
        readme.md
        deep/
          a_rather_long_file_name_used_for_testing.txt
      empty/
    """
    root = tmp_path / "root"
    (root / "docs" / "deep").mkdir(parents=True)
    (root / "empty").mkdir()
    (root / "a.txt").write_text("a")
    (root / "docs" / "readme.md").write_text("# readme\n")
    (root / "docs" / "deep" / "a_rather_long_file_name_used_for_testing.txt").write_text("x" * 10)
    return root
