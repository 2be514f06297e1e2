"""Tests for dbapiext.query.Query: joins, index hints and unions."""

from dbapiext.dialects import MysqlDialect, PostgresDialect, SqliteDialect
from dbapiext.expressions import Join
from dbapiext.query import Query


def test_join_with_constraint():
    query = Query("tracks")
    join = query.add_join("artists", "LEFT JOIN")
    join.add_constraint("tracks.artist_id", "artists.id")
    assert query.to_sql() == (
        'SELECT *\nFROM "tracks"\nLEFT JOIN "artists"\nON\n  "tracks"."artist_id" = "artists"."id"'
    )


def test_join_type_is_upper_cased_and_aliased():
    join = Join("artists", "left join", "a")
    assert join.join_type == "LEFT JOIN"
    assert join.to_sql() == 'LEFT JOIN "artists" AS "a"'


def test_join_constraints_are_joined_with_and():
    join = Join("artists")
    join.add_constraint("tracks.artist_id", "artists.id")
    join.add_criterion("artists.active", 1)
    assert join.to_sql() == (
        'JOIN "artists"\nON\n  "tracks"."artist_id" = "artists"."id"\n  AND "artists"."active" = 1'
    )


def test_join_object():
    query = Query("tracks")
    join = Join("artists")
    assert query.add_join(join) is join
    assert query.joins == [join]


def test_force_index():
    join = Join("artists").force_index("primary")
    join.add_constraint("tracks.artist_id", "artists.id")
    assert join.to_sql(MysqlDialect()) == (
        "JOIN `artists`\nFORCE INDEX (`primary`)\nON\n  `tracks`.`artist_id` = `artists`.`id`"
    )


def test_force_index_on_sqlite():
    assert Join("artists").force_index("by_name").to_sql(SqliteDialect()) == 'JOIN "artists" INDEXED BY "by_name"'


def test_force_index_is_omitted_on_postgres():
    assert Join("artists").force_index("primary").to_sql(PostgresDialect()) == 'JOIN "artists"'


def test_join_subquery():
    assert Join(Query("artists"), alias="a").to_sql() == 'JOIN (\n  SELECT *\n  FROM "artists") AS "a"'


def test_unions():
    query = Query("a")
    query.add_union("b")
    query.add_union_all(Query("c"))
    assert query.to_sql() == (
        'SELECT *\nFROM "a"\nUNION\nSELECT *\nFROM "b"\nUNION ALL\nSELECT *\nFROM "c"'
    )


def test_add_union_returns_the_member():
    query = Query("a")
    union = query.add_union_distinct("b", "bb")
    union.where("id", 1)
    assert query.to_sql() == 'SELECT *\nFROM "a"\nUNION\nSELECT *\nFROM "b" AS "bb"\nWHERE\n  "id" = 1'


def test_order_comes_after_unions():
    query = Query("a")
    query.add_union("b")
    query.add_order("id")
    assert query.to_sql() == 'SELECT *\nFROM "a"\nUNION\nSELECT *\nFROM "b"\nORDER BY "id"'
