"""Tests for dbapiext.utils: row helpers and caller lookup."""

import sqlite3

import pytest

from dbapiext.errors import AmbiguousResultset
from dbapiext.utils import column_names, fetch_all_assoc, fetch_assoc, find_caller


@pytest.fixture
def raw():
    connection = sqlite3.connect(":memory:")
    yield connection
    connection.close()


def test_fetch_assoc(raw):
    cursor = raw.execute("SELECT 1 AS a, 'x' AS b")
    assert column_names(cursor) == ["a", "b"]
    assert fetch_assoc(cursor) == {"a": 1, "b": "x"}
    assert fetch_assoc(cursor) is None


def test_fetch_all_assoc(raw):
    cursor = raw.execute("SELECT 1 AS a UNION ALL SELECT 2")
    assert fetch_all_assoc(cursor) == [{"a": 1}, {"a": 2}]


def test_duplicate_columns(raw):
    with pytest.raises(AmbiguousResultset):
        fetch_assoc(raw.execute("SELECT 1 AS a, 2 AS a"))


def test_find_caller():
    assert "test_utils_rows.py:" in find_caller()
