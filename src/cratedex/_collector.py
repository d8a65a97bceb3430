"""Corpus collection from crate identifiers and descriptions."""

from __future__ import annotations

import re

from ._types import Crate

MIN_TOKEN_LENGTH = 3
MAX_DESCRIPTION_BYTES = 100

_SEPARATOR_RE = re.compile(r"[-_]")


def split_crate_id(name: str) -> list[str]:
    """Split a crate identifier on ``-`` and ``_`` (treated as equivalent)."""
    return _SEPARATOR_RE.split(name)


def truncate_description(text: str, limit: int = MAX_DESCRIPTION_BYTES) -> str:
    """Strip ``text`` and cap it at ``limit`` UTF-8 bytes.

    A multi-byte character straddling the limit is dropped whole.
    """
    text = text.strip()
    encoded = text.encode("utf-8")
    if len(encoded) <= limit:
        return text
    return encoded[:limit].decode("utf-8", errors="ignore")


class WordCollector:
    """Accumulates the token corpus fed to the minifier."""

    __slots__ = ("words",)

    def __init__(self) -> None:
        self.words: list[str] = []

    def collect_crate_id(self, name: str) -> None:
        for piece in split_crate_id(name.lower()):
            if len(piece) >= MIN_TOKEN_LENGTH:
                self.words.append(piece)

    def collect_crate_description(self, text: str) -> None:
        self.words.append(truncate_description(text))

    def collect(self, crate: Crate) -> None:
        """Collect the identifier tokens, then the description if present."""
        self.collect_crate_id(crate.name)
        if crate.description is not None:
            self.collect_crate_description(crate.description)
