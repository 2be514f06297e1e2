"""Tests for dbapiext.table.Selection: iteration, pagination and counting."""

from unittest.mock import MagicMock

import pytest

from dbapiext.connection import Connection
from dbapiext.dialects import MysqlDialect, SqliteDialect
from dbapiext.errors import CannotRewindResultset, MoreThanOneRowReturned
from dbapiext.table import Record, Selection


@pytest.fixture
def users(users_db):
    return users_db.table("users")


def test_select_iterates_records(users):
    selection = users.select()
    assert isinstance(selection, Selection)
    records = list(selection)
    assert len(records) == 14
    assert isinstance(records[0], Record)
    assert records[0].name == "Anna"


def test_selection_sql(users):
    assert users.select().to_sql(users.db) == 'SELECT *\nFROM "users"'


def test_where(users):
    assert [user.name for user in users.where("id", [3, 4])] == ["Charlotte", "Donna"]
    assert [user.name for user in users.where("id > ? AND id < ?", 12, 14)] == ["Madeleine"]


def test_one(users):
    assert users.where("name", "Anna").one().id == 1
    assert users.where("name", "Nobody").one() is None
    with pytest.raises(MoreThanOneRowReturned):
        users.where("id", 2, ">").one()


def test_all(users):
    assert [user.id for user in users.where("id", 12, ">").all()] == [13, 14]


def test_paginate(users):
    selection = users.paginate(2)
    records = list(selection)
    assert records[0].name == "Kimberley"
    assert len(records) == 4
    assert selection.total_count() == 14
    assert selection.total_pages() == 2


def test_paginate_one_per_page(users):
    selection = users.select().paginate(2, 1)
    records = selection.all()
    assert [record.name for record in records] == ["Betty"]
    assert selection.total_count() == 14
    assert selection.total_pages() == 14


def test_count_restores_limit_and_offset(users):
    selection = users.paginate(2, 5)
    list(selection)
    assert selection.total_count() == 14
    assert selection.limit == 5
    assert selection.offset == 5


def test_total_count_without_pagination(users):
    selection = users.where("name", "Anna", "!=")
    assert selection.total_count() == 13
    assert selection.total_pages() is None


def test_order_by(users):
    selection = users.select().order_by("id", "desc")
    assert [user.id for user in selection][:2] == [14, 13]


def test_result_is_memoized(users):
    selection = users.select()
    list(selection)
    with pytest.raises(CannotRewindResultset):
        list(selection)
    selection.paginate(1, 3)
    assert len(list(selection)) == 3


def test_found_rows_are_used_on_mysql():
    raw = MagicMock()
    cursor = raw.cursor.return_value
    cursor.description = [("id",), ("name",)]
    cursor.fetchone.side_effect = [(14,), (11, "Kimberley"), None]
    db = Connection(raw, MysqlDialect())
    selection = db.table("users").paginate(2)
    names = [user.name for user in selection]
    assert names == ["Kimberley"]
    assert selection.total_count() == 14
    executed = [call.args[0] for call in cursor.execute.call_args_list]
    assert executed == [
        "SELECT SQL_CALC_FOUND_ROWS *\nFROM `users`\nLIMIT 10\nOFFSET 10",
        "SELECT FOUND_ROWS()",
    ]


def test_count_with_query_on_mysql():
    raw = MagicMock()
    cursor = raw.cursor.return_value
    cursor.fetchone.return_value = (14,)
    db = Connection(raw, MysqlDialect())
    selection = db.table("users").paginate(2).count_with_query()
    assert selection.total_count() == 14
    executed = [call.args[0] for call in cursor.execute.call_args_list]
    assert executed[0] == "SELECT *\nFROM `users`\nLIMIT 10\nOFFSET 10"


def test_count_query_wraps_the_selection():
    raw = MagicMock()
    cursor = raw.cursor.return_value
    cursor.fetchone.return_value = (3,)
    db = Connection(raw, SqliteDialect())
    selection = db.table("users").where("name", "Anna", "!=")
    assert selection.total_count() == 3
    cursor.execute.assert_called_with(
        'SELECT count(*) AS "total_count"\n'
        "FROM (\n"
        "  SELECT *\n"
        '  FROM "users"\n'
        "  WHERE\n"
        "    \"name\" != 'Anna') AS \"from_sub\""
    )
