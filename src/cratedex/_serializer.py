"""JavaScript index assembly and output writing."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

from ._errors import CratedexDuplicateError, CratedexIOError

if TYPE_CHECKING:
    from ._minifier import MinifierProtocol
    from ._types import Crate

NULL_ALIAS = "N"
PREAMBLE = f"var {NULL_ALIAS}=null;"


def _js(value: object) -> str:
    # U+2028/U+2029 are line terminators inside pre-ES2019 string literals
    text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return text.replace("\u2028", "\\u2028").replace("\u2029", "\\u2029")


def build_crates_map(
    crates: list[Crate], minifier: MinifierProtocol
) -> dict[str, tuple[str | None, str]]:
    """Map minified crate id -> (minified description or None, version)."""
    crates_map: dict[str, tuple[str | None, str]] = {}
    for crate in crates:
        key = minifier.mapping_minify_crate_id(crate.name)
        if key in crates_map:
            raise CratedexDuplicateError(
                f"Crate {crate.name!r} collides with another crate on index key {key!r}"
            )
        description = None
        if crate.description is not None:
            description = minifier.mapping_minify(crate.description)
        crates_map[key] = (description, str(crate.version))
    return crates_map


def generate_crates_index(crates: list[Crate], minifier: MinifierProtocol) -> str:
    """Render the complete index file contents.

    Layout: null alias, ``mapping`` dictionary, ``crateIndex``. Keys are
    sorted so identical input always renders identical bytes. Absent
    descriptions are written as the null alias.
    """
    crates_map = build_crates_map(crates, minifier)
    mapping = minifier.get_mapping()

    entries = []
    for key in sorted(crates_map):
        description, version = crates_map[key]
        desc = NULL_ALIAS if description is None else _js(description)
        entries.append(f"{_js(key)}:[{desc},{_js(version)}]")

    contents = (
        PREAMBLE
        + f"var mapping={_js(dict(sorted(mapping.items())))};"
        + "var crateIndex={" + ",".join(entries) + "};"
    )
    return minifier.minify_json(contents)


def write_index(path: Path | str, contents: str) -> int:
    """Write ``contents`` as UTF-8, creating parent directories. Returns bytes written."""
    path = Path(path)
    data = contents.encode("utf-8")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise CratedexIOError(f"Cannot write {path}: {e.strerror or e}") from e
    return len(data)
