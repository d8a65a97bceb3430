"""Cratedex: compact crates.io search index builder for browser-side lookup."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._collector import WordCollector, split_crate_id, truncate_description
from ._errors import (
    CratedexDuplicateError,
    CratedexError,
    CratedexIOError,
    CratedexPopulationError,
    CratedexRecordError,
)
from ._minifier import Minifier, MinifierProtocol, expand, expand_crate_id
from ._pipeline import CRATES_INDEX_PATH, MAX_CRATE_SIZE, build_index
from ._types import SENTINEL_VERSION, BuildReport, Crate, CrateVersion

if TYPE_CHECKING:
    from pathlib import Path

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "build",
    "build_index",
    "BuildReport",
    "Crate",
    "CrateVersion",
    "CRATES_INDEX_PATH",
    "CratedexDuplicateError",
    "CratedexError",
    "CratedexIOError",
    "CratedexPopulationError",
    "CratedexRecordError",
    "expand",
    "expand_crate_id",
    "MAX_CRATE_SIZE",
    "Minifier",
    "MinifierProtocol",
    "SENTINEL_VERSION",
    "split_crate_id",
    "truncate_description",
    "WordCollector",
]


def build(
    csv_prefix: Path | str,
    output: Path | str | None = None,
    max_crates: int = MAX_CRATE_SIZE,
) -> BuildReport:
    """Build the index with the default minifier and return the build report.

    Args:
        csv_prefix: Directory (or path prefix) holding crates.csv and versions.csv.
        output: Destination file. If None, uses CRATES_INDEX_PATH.
        max_crates: Index size bound; max_crates + 1 crates are kept.
    """
    return build_index(csv_prefix, output, max_crates=max_crates)
