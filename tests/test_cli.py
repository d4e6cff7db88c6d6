"""CLI contract tests — exit codes and outputs of ``python -m path_audit``.

Code  Meaning
----  -------
  0   Success — no path exceeds the maximum
  1   Violation — at least one over-length path
  2   Error — bad arguments, missing root, invalid settings
"""

from __future__ import annotations

import csv
import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from path_audit.__main__ import main
from path_audit.contracts.load import validate_instance

REPO_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture(autouse=True)
def _no_env_defaults(monkeypatch):
    for name in (
        "PATH_AUDIT_MAX_LENGTH",
        "PATH_AUDIT_BATCH_SIZE",
        "PATH_AUDIT_THROTTLE_LIMIT",
        "PATH_AUDIT_EXECUTOR",
    ):
        monkeypatch.delenv(name, raising=False)


# ── exit codes ──────────────────────────────────────────────────────


class TestExitCodes:
    def test_clean_tree_returns_0(self, sample_tree: Path, capsys) -> None:
        rc = main([str(sample_tree), "--max-length", "10000", "-q"])
        assert rc == 0
        assert "No paths exceed the maximum length." in capsys.readouterr().out

    def test_violations_return_1(self, sample_tree: Path, capsys) -> None:
        rc = main([str(sample_tree), "--max-length", "1", "-q"])
        assert rc == 1
        out = capsys.readouterr().out
        assert "a_rather_long_file_name_used_for_testing.txt" in out

    def test_parallel_violations_return_1(self, sample_tree: Path) -> None:
        rc = main(
            [
                str(sample_tree),
                "--max-length", "1",
                "--parallel",
                "--executor", "thread",
                "--throttle-limit", "2",
                "--batch-size", "2",
                "-q",
            ]
        )
        assert rc == 1

    def test_missing_root_returns_2(self, tmp_path: Path, capsys) -> None:
        rc = main([str(tmp_path / "does-not-exist"), "-q"])
        assert rc == 2
        assert "error:" in capsys.readouterr().err

    @pytest.mark.parametrize("flag,value", [("--max-length", "0"), ("--batch-size", "0"), ("--throttle-limit", "0")])
    def test_invalid_setting_returns_2(self, sample_tree: Path, flag: str, value: str) -> None:
        assert main([str(sample_tree), flag, value, "-q"]) == 2

    def test_bad_env_value_returns_2(self, sample_tree: Path, monkeypatch, capsys) -> None:
        monkeypatch.setenv("PATH_AUDIT_MAX_LENGTH", "long")
        assert main([str(sample_tree), "-q"]) == 2
        assert "PATH_AUDIT_MAX_LENGTH" in capsys.readouterr().err


# ── outputs ─────────────────────────────────────────────────────────


class TestOutputs:
    def test_json_output_is_valid_contract(self, sample_tree: Path, capsys) -> None:
        rc = main([str(sample_tree), "--max-length", "1", "--json", "--ci"])
        assert rc == 1
        obj = json.loads(capsys.readouterr().out)
        validate_instance(obj, "scan_result.schema.json")
        assert obj["run"]["created_at"] == "2000-01-01T00:00:00+00:00"
        assert obj["summary"]["violations_total"] == 6

    def test_ci_json_is_deterministic(self, sample_tree: Path, capsys) -> None:
        main([str(sample_tree), "--max-length", "1", "--json", "--ci"])
        first = capsys.readouterr().out
        main([str(sample_tree), "--max-length", "1", "--json", "--ci"])
        assert capsys.readouterr().out == first

    def test_progress_goes_to_stderr(self, sample_tree: Path, capsys) -> None:
        main([str(sample_tree), "--max-length", "1"])
        captured = capsys.readouterr()
        assert "Checked 6/6 entries (100%)" in captured.err
        assert "Checked" not in captured.out

    def test_csv_export(self, sample_tree: Path, tmp_path: Path) -> None:
        out = tmp_path / "long.csv"
        rc = main([str(sample_tree), "--max-length", "1", "--csv", str(out), "-q"])
        assert rc == 1
        with out.open(encoding="utf-8", newline="") as fh:
            rows = list(csv.DictReader(fh))
        assert len(rows) == 6
        assert {r["Type"] for r in rows} == {"File", "Folder"}

    def test_unwritable_csv_is_a_warning(self, sample_tree: Path, tmp_path: Path, capsys) -> None:
        """Results are still reported when the export target cannot be written."""
        rc = main([str(sample_tree), "--max-length", "1", "--csv", str(tmp_path), "-q"])
        assert rc == 1
        captured = capsys.readouterr()
        assert "warning: could not write CSV" in captured.err
        assert "a.txt" in captured.out

    def test_markdown_export(self, sample_tree: Path, tmp_path: Path) -> None:
        out = tmp_path / "report.md"
        main([str(sample_tree), "--max-length", "1", "--markdown", str(out), "-q"])
        assert out.read_text(encoding="utf-8").startswith("# Path Length Report")

    def test_top_limits_table(self, sample_tree: Path, capsys) -> None:
        main([str(sample_tree), "--max-length", "1", "--top", "2", "-q"])
        assert "… and 4 more" in capsys.readouterr().out


# ── undecodable filenames ───────────────────────────────────────────

_BAD_NAME = b"bad\xffname_long_enough.txt"


@pytest.fixture()
def undecodable_tree(tmp_path: Path) -> Path:
    """A root holding one file whose name is not valid UTF-8."""
    if sys.platform == "win32" or sys.getfilesystemencoding().lower() != "utf-8":
        pytest.skip("needs a byte-oriented UTF-8 filesystem")
    root = tmp_path / "root"
    root.mkdir()
    try:
        with open(os.path.join(os.fsencode(root), _BAD_NAME), "wb") as fh:
            fh.write(b"x")
    except OSError:
        pytest.skip("filesystem rejects non-UTF-8 names")
    return root


class TestUndecodableNames:
    def test_table_shows_escaped_name(self, undecodable_tree: Path, capsys) -> None:
        rc = main([str(undecodable_tree), "--max-length", "5", "-q"])
        assert rc == 1
        assert "bad\\xffname_long_enough.txt" in capsys.readouterr().out

    def test_json_output_is_valid_utf8(self, undecodable_tree: Path, capsys) -> None:
        rc = main([str(undecodable_tree), "--max-length", "5", "--json"])
        assert rc == 1
        obj = json.loads(capsys.readouterr().out)
        validate_instance(obj, "scan_result.schema.json")
        assert [v["name"] for v in obj["violations"]] == ["bad\\xffname_long_enough.txt"]

    def test_csv_keeps_original_bytes(self, undecodable_tree: Path, tmp_path: Path) -> None:
        out = tmp_path / "long.csv"
        rc = main([str(undecodable_tree), "--max-length", "5", "-q", "--csv", str(out)])
        assert rc == 1
        assert _BAD_NAME in out.read_bytes()

    def test_markdown_export(self, undecodable_tree: Path, tmp_path: Path) -> None:
        out = tmp_path / "report.md"
        rc = main([str(undecodable_tree), "--max-length", "5", "-q", "--markdown", str(out)])
        assert rc == 1
        assert "bad\\xffname_long_enough.txt" in out.read_text(encoding="utf-8")


# ── subprocess ──────────────────────────────────────────────────────


def _run(*args: str) -> subprocess.CompletedProcess[str]:
    env = {**os.environ}
    env["PYTHONPATH"] = str(REPO_ROOT / "src") + (
        os.pathsep + env.get("PYTHONPATH", "") if env.get("PYTHONPATH") else ""
    )
    return subprocess.run(
        [sys.executable, "-m", "path_audit", *args],
        capture_output=True,
        text=True,
        env=env,
    )


class TestModuleEntrypoint:
    def test_process_pool_scan_via_subprocess(self, sample_tree: Path) -> None:
        r = _run(str(sample_tree), "--max-length", "1", "--parallel", "--batch-size", "2", "--json")
        assert r.returncode == 1, r.stderr
        assert json.loads(r.stdout)["summary"]["batches"] == 3

    def test_version(self) -> None:
        r = _run("--version")
        assert r.returncode == 0
        assert "path-audit" in r.stdout
