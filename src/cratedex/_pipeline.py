"""End-to-end index build: load, rank, resolve, collect, minify, write."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

import structlog

from ._collector import WordCollector
from ._loader import load_crates, load_versions
from ._minifier import Minifier, MinifierProtocol
from ._ranker import rank_crates
from ._resolver import latest_versions, resolve_versions
from ._serializer import generate_crates_index, write_index
from ._types import BuildReport

logger = structlog.get_logger(__name__)

MAX_CRATE_SIZE = 20 * 1000
CRATES_INDEX_PATH = "../extension/index/crates.js"
CRATES_CSV = "crates.csv"
VERSIONS_CSV = "versions.csv"


def input_path(prefix: Path | str, filename: str) -> Path:
    """Locate an input table: joined under a directory, else appended to a prefix."""
    if os.path.isdir(prefix):
        return Path(prefix) / filename
    return Path(f"{prefix}{filename}")


def build_index(
    csv_prefix: Path | str,
    output: Path | str | None = None,
    *,
    max_crates: int = MAX_CRATE_SIZE,
    minifier_factory: Callable[[list[str]], MinifierProtocol] = Minifier,
) -> BuildReport:
    """Build the crates search index and write it to ``output``.

    Args:
        csv_prefix: Directory (or path prefix) holding ``crates.csv`` and
            ``versions.csv``.
        output: Destination file. Defaults to ``CRATES_INDEX_PATH``.
        max_crates: Index size bound; ``max_crates + 1`` crates are kept.
        minifier_factory: Builds the substitution dictionary from the corpus.

    Raises:
        CratedexError: on the first failing stage. Nothing is written then.
    """
    output_path = Path(output) if output is not None else Path(CRATES_INDEX_PATH)

    crates = load_crates(input_path(csv_prefix, CRATES_CSV))
    logger.info("crates_loaded", count=len(crates))
    crates_loaded = len(crates)

    crates = rank_crates(crates, max_crates)
    logger.info("crates_ranked", kept=len(crates), max_crates=max_crates)

    versions = load_versions(input_path(csv_prefix, VERSIONS_CSV))
    versions_loaded = len(versions)
    latest = latest_versions(versions)
    del versions
    resolved = resolve_versions(crates, latest)
    logger.info(
        "versions_resolved",
        versions_loaded=versions_loaded,
        distinct_crates=len(latest),
        resolved=resolved,
        unresolved=len(crates) - resolved,
    )

    collector = WordCollector()
    for crate in crates:
        collector.collect(crate)
    logger.info("corpus_collected", words=len(collector.words))

    minifier = minifier_factory(collector.words)
    mapping_size = len(minifier.get_mapping())
    contents = generate_crates_index(crates, minifier)
    bytes_written = write_index(output_path, contents)
    logger.info(
        "index_written",
        path=str(output_path),
        bytes=bytes_written,
        mapping_size=mapping_size,
    )

    return BuildReport(
        crates_loaded=crates_loaded,
        versions_loaded=versions_loaded,
        crates_indexed=len(crates),
        versions_resolved=resolved,
        corpus_size=len(collector.words),
        mapping_size=mapping_size,
        output_path=output_path,
        bytes_written=bytes_written,
    )
