"""CSV loading and typed record coercion for the crates.io database dump."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
from semver import Version

from ._errors import CratedexIOError, CratedexRecordError
from ._types import Crate, CrateVersion

_CRATE_COLUMNS = ("id", "name", "downloads", "description")
_VERSION_COLUMNS = ("crate_id", "num")

_UINT_RE = r"[0-9]+"


def read_csv(
    path: Path | str,
    columns: tuple[str, ...],
    integer_columns: tuple[str, ...] = (),
) -> pd.DataFrame:
    """Read a header-delimited file into a frame holding ``columns``.

    Cells are read as text; ``integer_columns`` must hold plain ASCII digits
    and come back as int64. Blank lines are skipped. Either the complete
    table is returned, in file order, or an error is raised.

    Rows in error messages are numbered from 1, blank lines not counted.
    """
    path = Path(path)
    try:
        df = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            on_bad_lines="error",
            encoding="utf-8",
        )
    except pd.errors.EmptyDataError:
        raise CratedexRecordError(f"{path}: missing header row") from None
    except pd.errors.ParserError as e:
        raise CratedexRecordError(f"{path}: {e}") from e
    except UnicodeDecodeError as e:
        raise CratedexRecordError(f"{path}: not valid UTF-8 ({e.reason})") from e
    except OSError as e:
        raise CratedexIOError(f"Cannot read {path}: {e.strerror or e}") from e

    missing = [name for name in columns if name not in df.columns]
    if missing:
        raise CratedexRecordError(
            f"{path}: missing required column(s) {', '.join(missing)}"
        )
    df = df[list(columns)].copy()

    # short rows are padded with NaN
    short = df.isna().any(axis=1)
    if short.any():
        row = int(short.to_numpy().argmax()) + 1
        raise CratedexRecordError(
            f"{path}: row {row}: expected {len(columns)} fields or more"
        )

    for column in integer_columns:
        bad = ~df[column].str.fullmatch(_UINT_RE)
        if bad.any():
            row = int(bad.to_numpy().argmax()) + 1
            value = df[column].iloc[row - 1]
            raise CratedexRecordError(
                f"{path}: row {row}: column {column!r}: {value!r} "
                "is not a non-negative integer"
            )
        try:
            df[column] = df[column].astype("int64")
        except (ValueError, OverflowError) as e:
            raise CratedexRecordError(f"{path}: column {column!r}: {e}") from e
    return df


def load_crates(path: Path | str) -> list[Crate]:
    """Load the package table (``crates.csv``)."""
    df = read_csv(path, _CRATE_COLUMNS, ("id", "downloads"))
    return [
        Crate(
            id=int(crate_id),
            name=name,
            downloads=int(downloads),
            description=description if description else None,
        )
        for crate_id, name, downloads, description in zip(
            df["id"], df["name"], df["downloads"], df["description"]
        )
    ]


def load_versions(path: Path | str) -> list[CrateVersion]:
    """Load the package-version table (``versions.csv``)."""
    df = read_csv(path, _VERSION_COLUMNS, ("crate_id",))
    versions: list[CrateVersion] = []
    for row, (crate_id, num) in enumerate(zip(df["crate_id"], df["num"]), start=1):
        try:
            version = Version.parse(num)
        except (ValueError, TypeError):
            raise CratedexRecordError(
                f"{path}: row {row}: column 'num': {num!r} is not a semantic version"
            ) from None
        versions.append(CrateVersion(crate_id=int(crate_id), num=version))
    return versions
