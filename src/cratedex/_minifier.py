"""Frequency-based token substitution (Aho-Corasick) and JSON whitespace stripping."""

from __future__ import annotations

import re
import string
from collections import Counter
from typing import Protocol

import ahocorasick

from ._collector import MIN_TOKEN_LENGTH, split_crate_id

DEFAULT_MAX_ENTRIES = 2048

_ESCAPE = "$"
_CODE_ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase
_WORD_RE = re.compile(r"[A-Za-z0-9]+")
_CODE_RE = re.compile(r"\$(\$|[A-Za-z0-9]+)")

# "word":"$c", plus the separator
_ENTRY_OVERHEAD = 6


class MinifierProtocol(Protocol):
    """What the index build needs from a token-compression dictionary."""

    def get_mapping(self) -> dict[str, str]: ...

    def mapping_minify_crate_id(self, name: str) -> str: ...

    def mapping_minify(self, text: str) -> str: ...

    @staticmethod
    def minify_json(text: str) -> str: ...


def _code(index: int) -> str:
    """Base-62 substitute for the index-th dictionary entry, ``$``-prefixed."""
    digits = []
    while True:
        index, rem = divmod(index, len(_CODE_ALPHABET))
        digits.append(_CODE_ALPHABET[rem])
        if index == 0:
            break
    return _ESCAPE + "".join(reversed(digits))


def _is_word_char(ch: str) -> bool:
    return ch.isascii() and ch.isalnum()


def _is_ident_char(ch: str) -> bool:
    return _is_word_char(ch) or ch in "_$"


def _escape(text: str) -> str:
    return text.replace(_ESCAPE, _ESCAPE + _ESCAPE)


class Minifier:
    """Substitution dictionary built from a token corpus.

    The most valuable words (length times frequency) get the shortest
    ``$``-prefixed codes. A word is only kept when substituting it saves more
    bytes than its dictionary entry costs. Literal ``$`` is escaped as ``$$``
    in minified output, so ``expand`` always restores the input exactly.
    """

    __slots__ = ("_mapping", "_automaton")

    def __init__(
        self,
        words: list[str],
        *,
        min_length: int = MIN_TOKEN_LENGTH,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ) -> None:
        counts: Counter[str] = Counter()
        for entry in words:
            counts.update(
                w for w in _WORD_RE.findall(entry) if len(w) >= min_length
            )

        ranked = sorted(counts.items(), key=lambda wc: (-len(wc[0]) * wc[1], wc[0]))
        self._mapping: dict[str, str] = {}
        for word, frequency in ranked:
            if len(self._mapping) >= max_entries:
                break
            code = _code(len(self._mapping))
            saved = (len(word) - len(code)) * frequency
            if saved <= len(word) + len(code) + _ENTRY_OVERHEAD:
                continue
            self._mapping[word] = code

        self._automaton = None
        if self._mapping:
            ac = ahocorasick.Automaton()
            for word in self._mapping:
                ac.add_word(word, word)
            ac.make_automaton()
            self._automaton = ac

    def __len__(self) -> int:
        return len(self._mapping)

    def get_mapping(self) -> dict[str, str]:
        """Return the dictionary as token -> substitute."""
        return dict(self._mapping)

    def mapping_minify_crate_id(self, name: str) -> str:
        """Substitute whole identifier pieces; pieces are re-joined with ``_``."""
        return "_".join(
            self._mapping.get(piece) or _escape(piece)
            for piece in split_crate_id(name)
        )

    def mapping_minify(self, text: str) -> str:
        """Substitute whole-word dictionary tokens inside free text."""
        if self._automaton is None:
            return _escape(text)

        # Collect all whole-word matches
        matches: list[tuple[int, int, str]] = []
        for end_inclusive, word in self._automaton.iter(text):
            end = end_inclusive + 1
            start = end - len(word)
            if start > 0 and _is_word_char(text[start - 1]):
                continue
            if end < len(text) and _is_word_char(text[end]):
                continue
            matches.append((start, end, word))

        # Leftmost-longest non-overlapping selection
        matches.sort(key=lambda m: (m[0], -(m[1] - m[0])))
        parts: list[str] = []
        last_end = 0
        for start, end, word in matches:
            if start >= last_end:
                parts.append(_escape(text[last_end:start]))
                parts.append(self._mapping[word])
                last_end = end
        parts.append(_escape(text[last_end:]))
        return "".join(parts)

    @staticmethod
    def minify_json(text: str) -> str:
        """Drop whitespace outside string literals.

        A single space survives between two identifier characters, so
        ``var crateIndex`` stays valid.
        """
        out: list[str] = []
        in_string = False
        escaped = False
        pending_space = False
        for ch in text:
            if in_string:
                out.append(ch)
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
                continue
            if ch.isspace():
                pending_space = True
                continue
            if pending_space and out and _is_ident_char(out[-1]) and _is_ident_char(ch):
                out.append(" ")
            pending_space = False
            out.append(ch)
            if ch == '"':
                in_string = True
        return "".join(out)


def expand(text: str, mapping: dict[str, str]) -> str:
    """Reverse ``Minifier.mapping_minify`` given its token -> substitute mapping."""
    reverse = {code: word for word, code in mapping.items()}

    def _replace(m: re.Match[str]) -> str:
        if m.group(1) == _ESCAPE:
            return _ESCAPE
        return reverse.get(m.group(0), m.group(0))

    return _CODE_RE.sub(_replace, text)


def expand_crate_id(name: str, mapping: dict[str, str]) -> str:
    """Reverse ``Minifier.mapping_minify_crate_id`` (separators come back as ``_``)."""
    return "_".join(expand(piece, mapping) for piece in name.split("_"))
