"""CLI entry-point for path_audit.

Usage:
    python -m path_audit <root>
    python -m path_audit <root> --max-length 200
    python -m path_audit <root> --parallel --throttle-limit 8 --batch-size 5000
    python -m path_audit <root> --csv long_paths.csv --markdown report.md
    python -m path_audit <root> --json --ci
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from path_audit import __version__
from path_audit.api import build_config, make_deterministic
from path_audit.contracts.load import validate_instance
from path_audit.core.config import EXECUTORS
from path_audit.core.errors import ScanSetupError
from path_audit.core.runner import run_scan
from path_audit.model.scan_result import ScanResult
from path_audit.reports.exporters import export_csv, export_markdown
from path_audit.reports.progress import ProgressReporter
from path_audit.reports.table import render_table
from path_audit.utils.exit_codes import ExitCode
from path_audit.utils.json_norm import stable_json_dump


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="path-audit",
        description="Report files and folders whose full path exceeds a maximum length.",
    )
    p.add_argument(
        "path",
        type=Path,
        help="Root directory to scan.",
    )
    p.add_argument(
        "--max-length",
        dest="max_length",
        type=int,
        default=None,
        help="Longest allowed path in characters (default: $PATH_AUDIT_MAX_LENGTH or 260).",
    )
    p.add_argument(
        "--parallel",
        dest="use_parallel",
        action="store_true",
        default=False,
        help="Filter entries in batches on a worker pool.",
    )
    p.add_argument(
        "--throttle-limit",
        dest="throttle_limit",
        type=int,
        default=None,
        help="Maximum concurrent workers in parallel mode (default: CPU count).",
    )
    p.add_argument(
        "--batch-size",
        dest="batch_size",
        type=int,
        default=None,
        help="Entries per batch in parallel mode (default: 1000).",
    )
    p.add_argument(
        "--executor",
        choices=EXECUTORS,
        default=None,
        help="Worker kind in parallel mode (default: process).",
    )
    p.add_argument(
        "--csv",
        dest="csv_out",
        type=Path,
        default=None,
        metavar="FILE",
        help="Also write the violations to FILE as UTF-8 CSV.",
    )
    p.add_argument(
        "--markdown",
        dest="markdown_out",
        type=Path,
        default=None,
        metavar="FILE",
        help="Also write a Markdown report to FILE.",
    )
    p.add_argument(
        "--json",
        dest="json_out",
        action="store_true",
        default=False,
        help="Print the full ScanResult JSON to stdout instead of the table.",
    )
    p.add_argument(
        "--top",
        type=int,
        default=50,
        help="Rows to show in the table (0 = all).",
    )
    p.add_argument(
        "--ci",
        "--deterministic",
        dest="ci_mode",
        action="store_true",
        default=False,
        help="Enable deterministic output (fixed run id and timestamps).",
    )
    p.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=False,
        help="Do not print progress.",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Log skipped directories and pool activity.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return p


def _write_exports(result: ScanResult, args: argparse.Namespace) -> None:
    """Optional exports; a failure here is a warning, never a lost result."""
    if args.csv_out is not None:
        try:
            export_csv(result, args.csv_out)
            print(f"CSV written to {args.csv_out}", file=sys.stderr)
        except (OSError, UnicodeError) as e:
            print(f"warning: could not write CSV {args.csv_out}: {e}", file=sys.stderr)
    if args.markdown_out is not None:
        try:
            args.markdown_out.write_text(export_markdown(result), encoding="utf-8")
            print(f"Markdown written to {args.markdown_out}", file=sys.stderr)
        except (OSError, UnicodeError) as e:
            print(f"warning: could not write Markdown {args.markdown_out}: {e}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """Entry-point — 0 = nothing too long, 1 = violations found, 2 = error."""
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        config = build_config(
            args.path,
            max_length=args.max_length,
            use_parallel=args.use_parallel,
            throttle_limit=args.throttle_limit,
            batch_size=args.batch_size,
            executor=args.executor,
        )
    except ScanSetupError as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.ERROR

    progress = None if (args.quiet or args.json_out) else ProgressReporter(sys.stderr)
    try:
        result = run_scan(config, on_progress=progress)
    except ScanSetupError as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.ERROR

    if args.ci_mode:
        make_deterministic(result)

    if args.json_out:
        result_dict = result.to_dict()
        validate_instance(result_dict, "scan_result.schema.json")
        stable_json_dump(result_dict, sys.stdout, indent=2)
    else:
        top_n = args.top if args.top > 0 else None
        sys.stdout.write(render_table(result, top_n=top_n))

    _write_exports(result, args)

    return ExitCode.VIOLATION if result.summary.count else ExitCode.SUCCESS


if __name__ == "__main__":
    raise SystemExit(main())
