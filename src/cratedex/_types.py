"""Data structures for cratedex."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from semver import Version

SENTINEL_VERSION = Version(0, 0, 0)


@dataclass(slots=True)
class Crate:
    id: int
    name: str
    downloads: int
    description: str | None = None
    version: Version = SENTINEL_VERSION  # set by the resolver


@dataclass(slots=True, frozen=True)
class CrateVersion:
    crate_id: int   # foreign key into Crate.id
    num: Version


@dataclass(slots=True, frozen=True)
class BuildReport:
    crates_loaded: int
    versions_loaded: int
    crates_indexed: int
    versions_resolved: int
    corpus_size: int
    mapping_size: int
    output_path: Path
    bytes_written: int
