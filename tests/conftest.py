"""Shared fixtures for cratedex tests."""

import csv

import pytest
import structlog


class IdentityMinifier:
    """Minifier stub that performs no substitution."""

    def __init__(self, words):
        self.words = list(words)

    def get_mapping(self):
        return {}

    def mapping_minify_crate_id(self, name):
        return name

    def mapping_minify(self, text):
        return text

    @staticmethod
    def minify_json(text):
        return text


def write_csv(path, header, rows):
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        writer.writerows(rows)
    return path


CRATE_ROWS = [
    # id, name, downloads, description
    (1, "serde", 9000, "A generic serialization/deserialization framework"),
    (2, "serde_json", 8000, "A JSON serialization file format"),
    (3, "rand", 7000, "Random number generators and other randomness functionality."),
    (4, "tokio", 6000, "An event-driven, non-blocking I/O platform for writing asynchronous I/O backed applications."),
    (5, "a-b", 5, ""),
    (6, "serde-yaml", 500, "YAML support for Serde"),
]

VERSION_ROWS = [
    # crate_id, num
    (1, "1.0.0"),
    (1, "1.0.104"),
    (1, "0.9.15"),
    (2, "1.0.0"),
    (2, "1.0.48"),
    (3, "0.7.3"),
    (3, "0.8.0-alpha.1"),
    (4, "0.2.11"),
    (6, "0.8.11"),
]


@pytest.fixture
def identity_minifier():
    return IdentityMinifier


@pytest.fixture
def csv_dir(tmp_path):
    """A directory holding a small crates.csv and versions.csv."""
    write_csv(
        tmp_path / "crates.csv",
        ["id", "name", "downloads", "description", "homepage"],
        [row + ("https://example.org",) for row in CRATE_ROWS],
    )
    write_csv(tmp_path / "versions.csv", ["id", "crate_id", "num"],
              [(i, cid, num) for i, (cid, num) in enumerate(VERSION_ROWS)])
    return tmp_path


@pytest.fixture
def make_csv():
    return write_csv


@pytest.fixture(autouse=True)
def _reset_structlog():
    """The CLI reconfigures structlog; undo it after each test."""
    yield
    structlog.reset_defaults()
