"""Latest-version resolution for ranked crates."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._types import Crate, CrateVersion

if TYPE_CHECKING:
    from semver import Version


def latest_versions(versions: list[CrateVersion]) -> dict[int, Version]:
    """Map each crate id to its highest version.

    Versions are visited highest first and only the first one seen per
    crate id is kept, so the table holds at most one version per crate.
    Equal versions keep their input order.
    """
    latest: dict[int, Version] = {}
    for record in sorted(versions, key=lambda v: v.num, reverse=True):
        if record.crate_id not in latest:
            latest[record.crate_id] = record.num
    return latest


def resolve_versions(crates: list[Crate], latest: dict[int, Version]) -> int:
    """Set ``crate.version`` in place from ``latest``.

    Crates without an entry keep the sentinel version. Returns the number of
    crates that were resolved.
    """
    resolved = 0
    for crate in crates:
        version = latest.get(crate.id)
        if version is not None:
            crate.version = version
            resolved += 1
    return resolved
