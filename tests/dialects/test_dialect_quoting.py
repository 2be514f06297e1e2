"""Tests for dbapiext.dialects: identifier and literal quoting per engine."""

import sqlite3
import uuid

import pytest

from dbapiext.dialects import AnsiDialect, MysqlDialect, PostgresDialect, SqliteDialect, SqlserverDialect


@pytest.mark.parametrize(
    "dialect,expected",
    [
        (AnsiDialect(), '"users"."name"'),
        (SqliteDialect(), '"users"."name"'),
        (PostgresDialect(), '"users"."name"'),
        (MysqlDialect(), "`users`.`name`"),
        (SqlserverDialect(), "[users].[name]"),
    ],
)
def test_quote_name(dialect, expected):
    assert dialect.quote_name("users.name") == expected


def test_quote_name_doubles_closing_quote():
    assert AnsiDialect().quote_name('we"ird') == '"we""ird"'
    assert MysqlDialect().quote_name("we`ird") == "`we``ird`"
    assert SqlserverDialect().quote_name("we]ird") == "[we]]ird]"


def test_quote_string():
    assert AnsiDialect().quote("it's") == "'it''s'"
    assert MysqlDialect().quote("it's\n") == "'it\\'s\\n'"


def test_quote_bytes():
    assert AnsiDialect().quote(b"\x01\xff") == "X'01FF'"
    assert SqlserverDialect().quote(b"\x01\xff") == "0x01FF"
    assert PostgresDialect().quote(b"\x01\xff") == "'\\x01ff'::bytea"


def test_quote_enum():
    import enum

    class Color(enum.Enum):
        RED = "red"

    assert AnsiDialect().quote(Color.RED) == "'red'"


def test_quote_rejects_unknown_types():
    with pytest.raises(TypeError):
        AnsiDialect().quote(uuid.uuid4())


def test_escape_like():
    assert AnsiDialect().escape_like("A*") == "'A%'"
    assert AnsiDialect().escape_like("A?", "?") == "'A%'"


@pytest.mark.parametrize("value", ["plain", "it's", 'say "hi"', "back\\slash", "", "ünïcødé", "%_"])
def test_quoted_strings_round_trip_through_sqlite(value):
    raw = sqlite3.connect(":memory:")
    try:
        assert raw.execute("SELECT " + SqliteDialect().quote(value)).fetchone()[0] == value
    finally:
        raw.close()


def test_quoted_names_round_trip_through_sqlite():
    raw = sqlite3.connect(":memory:")
    try:
        name = SqliteDialect().quote_name('odd "name"')
        raw.execute(f"CREATE TABLE {name} (x INTEGER)")
        tables = [row[0] for row in raw.execute("SELECT name FROM sqlite_master")]
        assert tables == ['odd "name"']
    finally:
        raw.close()
