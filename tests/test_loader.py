"""Tests for CSV loading and record coercion."""

import pytest
from semver import Version

from cratedex._errors import CratedexIOError, CratedexRecordError
from cratedex._loader import load_crates, load_versions, read_csv
from cratedex._types import SENTINEL_VERSION


def test_load_crates(csv_dir):
    crates = load_crates(csv_dir / "crates.csv")
    assert [c.id for c in crates] == [1, 2, 3, 4, 5, 6]
    first = crates[0]
    assert first.name == "serde"
    assert first.downloads == 9000
    assert first.description.startswith("A generic")
    assert first.version == SENTINEL_VERSION


def test_empty_description_is_none(csv_dir):
    crates = load_crates(csv_dir / "crates.csv")
    assert crates[4].name == "a-b"
    assert crates[4].description is None


def test_load_versions(csv_dir):
    versions = load_versions(csv_dir / "versions.csv")
    assert len(versions) == 9
    assert versions[0].crate_id == 1
    assert versions[0].num == Version(1, 0, 0)
    assert versions[6].num.prerelease == "alpha.1"


def test_missing_file(tmp_path):
    with pytest.raises(CratedexIOError, match="Cannot read"):
        load_crates(tmp_path / "nope.csv")


def test_non_numeric_id(tmp_path, make_csv):
    path = make_csv(tmp_path / "crates.csv", ["id", "name", "downloads", "description"],
                    [(1, "ok", 1, ""), ("x", "bad", 1, "")])
    with pytest.raises(CratedexRecordError, match=r"crates.csv: row 2: column 'id'"):
        load_crates(path)


def test_negative_downloads(tmp_path, make_csv):
    path = make_csv(tmp_path / "crates.csv", ["id", "name", "downloads", "description"],
                    [(1, "ok", -4, "")])
    with pytest.raises(CratedexRecordError, match="negative"):
        load_crates(path)


def test_unparsable_version(tmp_path, make_csv):
    path = make_csv(tmp_path / "versions.csv", ["crate_id", "num"],
                    [(1, "1.0.0"), (1, "one.two")])
    with pytest.raises(CratedexRecordError, match="not a semantic version"):
        load_versions(path)


def test_missing_column(tmp_path, make_csv):
    path = make_csv(tmp_path / "crates.csv", ["id", "name", "description"],
                    [(1, "ok", "")])
    with pytest.raises(CratedexRecordError, match="downloads"):
        load_crates(path)


def test_ragged_row(tmp_path):
    path = tmp_path / "versions.csv"
    path.write_text("crate_id,num\n1,1.0.0\n2,1.0.0,extra\n", encoding="utf-8")
    with pytest.raises(CratedexRecordError, match="Expected 2 fields in line 3, saw 3"):
        load_versions(path)


def test_empty_file(tmp_path):
    path = tmp_path / "crates.csv"
    path.write_text("", encoding="utf-8")
    with pytest.raises(CratedexRecordError, match="missing header"):
        load_crates(path)


def test_header_only(tmp_path):
    path = tmp_path / "versions.csv"
    path.write_text("crate_id,num\n", encoding="utf-8")
    assert load_versions(path) == []


def test_large_field(tmp_path, make_csv):
    """Cells beyond the csv module's default limit should load."""
    readme = "x" * 200_000
    path = make_csv(tmp_path / "crates.csv",
                    ["id", "name", "downloads", "description", "readme"],
                    [(1, "big", 1, "desc", readme)])
    assert load_crates(path)[0].name == "big"


def test_quoted_multiline_description(tmp_path, make_csv):
    path = make_csv(tmp_path / "crates.csv", ["id", "name", "downloads", "description"],
                    [(1, "multi", 3, "line one\nline, two")])
    assert load_crates(path)[0].description == "line one\nline, two"


def test_read_csv_frame(tmp_path, make_csv):
    path = make_csv(tmp_path / "t.csv", ["a", "b", "c"], [(1, "x", "y"), (3, "z", "")])
    df = read_csv(path, ("b", "a"), ("a",))
    assert list(df.columns) == ["b", "a"]
    assert df["a"].tolist() == [1, 3]
    assert df["b"].tolist() == ["x", "z"]


def test_blank_lines_skipped(tmp_path):
    path = tmp_path / "versions.csv"
    path.write_text("crate_id,num\n1,1.0.0\n\n2,2.0.0\n", encoding="utf-8")
    versions = load_versions(path)
    assert [v.crate_id for v in versions] == [1, 2]
    assert str(versions[1].num) == "2.0.0"


@pytest.mark.parametrize("cell", ["1_000", " 7 ", "+3", "1.0"])
def test_integer_must_be_plain_digits(tmp_path, cell):
    path = tmp_path / "versions.csv"
    path.write_text(f'crate_id,num\n"{cell}",1.0.0\n', encoding="utf-8")
    with pytest.raises(CratedexRecordError, match="crate_id"):
        load_versions(path)


def test_short_row(tmp_path):
    path = tmp_path / "versions.csv"
    path.write_text("crate_id,num\n1,1.0.0\n2\n", encoding="utf-8")
    with pytest.raises(CratedexRecordError, match="row 2"):
        load_versions(path)


def test_na_text_kept(tmp_path, make_csv):
    """Cells such as 'NA' are text, not missing values."""
    path = make_csv(tmp_path / "crates.csv", ["id", "name", "downloads", "description"],
                    [(1, "na", 3, "NA")])
    assert load_crates(path)[0].description == "NA"
