"""Command-line entry point."""

from __future__ import annotations

import argparse
import sys

import structlog

from ._errors import CratedexError
from ._logging import configure_logging
from ._pipeline import CRATES_INDEX_PATH, MAX_CRATE_SIZE, build_index

logger = structlog.get_logger(__name__)


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {number}")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cratedex",
        description="Generate the javascript crates search index from a crates.io database dump.",
    )
    parser.add_argument(
        "csv_path",
        help="directory (or path prefix) containing crates.csv and versions.csv",
    )
    parser.add_argument(
        "output",
        nargs="?",
        default=CRATES_INDEX_PATH,
        help=f"output file (default: {CRATES_INDEX_PATH})",
    )
    parser.add_argument(
        "--max-crates",
        type=_non_negative_int,
        default=MAX_CRATE_SIZE,
        help=f"index size bound, max+1 crates are kept (default: {MAX_CRATE_SIZE})",
    )
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error"],
    )
    parser.add_argument("--json-logs", action="store_true", help="emit JSON log lines")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level, args.json_logs)

    try:
        build_index(args.csv_path, args.output, max_crates=args.max_crates)
    except CratedexError as e:
        logger.error("index_build_failed", error=str(e), kind=type(e).__name__)
        print(f"error: {e}", file=sys.stderr)
        return 1

    print("\nGenerate javascript crates index successful!")
    return 0
