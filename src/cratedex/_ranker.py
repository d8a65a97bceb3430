"""Popularity ranking and truncation of the crate population."""

from __future__ import annotations

from ._errors import CratedexPopulationError
from ._types import Crate


def rank_crates(crates: list[Crate], max_size: int) -> list[Crate]:
    """Return the ``max_size + 1`` most downloaded crates, most popular first.

    The bound is inclusive, so the result holds one more crate than
    ``max_size``. The sort is stable: crates with equal downloads keep their
    input order.

    Raises:
        CratedexPopulationError: fewer than ``max_size + 1`` crates were given.
    """
    if max_size < 0:
        raise ValueError(f"max_size must be non-negative, got {max_size}")
    needed = max_size + 1
    if len(crates) < needed:
        raise CratedexPopulationError(
            f"Need at least {needed} crates to build an index of size "
            f"{max_size}, only {len(crates)} loaded"
        )
    ranked = sorted(crates, key=lambda c: c.downloads, reverse=True)
    return ranked[:needed]
