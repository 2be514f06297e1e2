"""SELECT query builder.

A Query is the WHERE criteria of a statement plus everything around it:
selected columns, target table or sub-query, joins, grouping, unions, order
and limits. Rendering assembles the clauses in a fixed order::

    SELECT [modifiers] columns FROM target [AS alias] [joins] [WHERE ...]
    [GROUP BY ...] [HAVING ...] [UNION ...] [ORDER BY ...] [LIMIT n] [OFFSET n]

Rendering never mutates the query, so calling ``to_sql`` twice gives the
same string.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field as PydanticField

from .expressions import Criteria, Criterion, Expression, Field, Join, resolve_context
from .utils.indent import indent

_DIRECTIONS = ("ASC", "DESC")


class Query(Criteria):
    """Fluent SELECT builder; its own criteria form the WHERE clause (joined with AND)."""

    table: Any
    alias: Optional[str] = None
    columns: list[tuple[Expression, Optional[str]]] = PydanticField(default_factory=list)
    joins: list[Join] = PydanticField(default_factory=list)
    unions: list[tuple[Any, str]] = PydanticField(default_factory=list)
    group_by: list[Expression] = PydanticField(default_factory=list)
    having: Optional[Expression] = None
    order: list[tuple[Expression, Optional[str]]] = PydanticField(default_factory=list)
    limit: Optional[int] = None
    offset: Optional[int] = None
    sql_calc_found_rows: bool = False
    straight_join: bool = False

    def __init__(self, table: Any, alias: Optional[str] = None, **kwargs):
        kwargs.setdefault("conjunction", "AND")
        super().__init__(table=table, alias=alias, **kwargs)

    # building

    def add_join(self, table: Any, join_type: str = "JOIN", alias: Optional[str] = None) -> Join:
        """Add a join on a table name, a sub-query or a ready-made Join, and return the Join."""
        if isinstance(table, Join):
            return self.add_join_object(table)
        return self.add_join_object(Join(table, join_type, alias))

    def add_join_object(self, join: Join) -> Join:
        self.joins.append(join)
        return join

    def add_union(self, query: Any, alias: Optional[str] = None, kind: str = "DISTINCT") -> Query:
        """Append a UNION member (a Query or a table name) and return it."""
        union = query if isinstance(query, Query) else Query(query, alias)
        self.unions.append((union, kind.upper()))
        return union

    def add_union_distinct(self, query: Any, alias: Optional[str] = None) -> Query:
        return self.add_union(query, alias, "DISTINCT")

    def add_union_all(self, query: Any, alias: Optional[str] = None) -> Query:
        return self.add_union(query, alias, "ALL")

    def add_group_by(self, column: Any) -> Expression:
        group_by = column if isinstance(column, Expression) else Field(column)
        self.group_by.append(group_by)
        return group_by

    def set_having(self, left: Any, right: Any = None, comparator: str = "=") -> Expression:
        self.having = left if isinstance(left, Expression) else Criterion(left, right, comparator)
        return self.having

    def select_table_columns(self) -> Query:
        """Select ``table.*`` instead of ``*`` when no columns are set; joined columns are left out."""
        if not self.columns and not isinstance(self.table, Expression):
            self.columns.append((Field(f"{self.alias or self.table}.*"), None))
        return self

    def add_column(self, column: Any, alias: Optional[str] = None) -> Query:
        self.columns.append((column if isinstance(column, Expression) else Field(column), alias))
        return self

    def set_order(self, order: Any, direction: Optional[str] = None) -> Query:
        """Like add_order, but ignores an empty ``order``."""
        if order:
            self.add_order(order, direction)
        return self

    def add_order(self, order: Any, direction: Optional[str] = None) -> Query:
        """Order by ``order``; ``direction`` is kept only if it is ASC or DESC."""
        direction = direction.upper() if isinstance(direction, str) else None
        self.order.append((
            order if isinstance(order, Expression) else Field(order),
            direction if direction in _DIRECTIONS else None,
        ))
        return self

    def set_limit(self, limit: Any) -> Query:
        self.limit = None if limit is None else int(limit)
        return self

    def set_offset(self, offset: Any) -> Query:
        self.offset = None if offset is None else int(offset)
        return self

    def set_sql_calc_found_rows(self, value: bool = True) -> Query:
        """Ask MySQL to count the rows the query would return without its LIMIT."""
        self.sql_calc_found_rows = value
        return self

    def set_straight_join(self, value: bool = True) -> Query:
        """Ask MySQL to join tables in the order they are added."""
        self.straight_join = value
        return self

    # rendering

    def to_sql(self, db: Any = None) -> str:
        db = resolve_context(db)
        sql = "SELECT"
        if self.sql_calc_found_rows and db.supports_sql_calc_found_rows():
            sql += " SQL_CALC_FOUND_ROWS"
        if self.straight_join and db.supports_straight_join():
            sql += " STRAIGHT_JOIN"
        sql += self._sql_columns(db)
        alias = self.alias
        if isinstance(self.table, Expression):
            sql += "\nFROM (" + indent(self.table.to_sql(db), True) + ")"
            alias = alias or "from_sub"
        else:
            sql += "\nFROM " + db.quote_name(self.table)
        if alias:
            sql += " AS " + db.quote_name(alias)
        for join in self.joins:
            sql += "\n" + join.to_sql(db)
        where = super().to_sql(db)
        if where:
            sql += "\nWHERE\n" + indent(where)
        if self.group_by:
            sql += "\nGROUP BY\n" + indent(",\n".join(column.to_sql(db) for column in self.group_by))
        if self.having is not None:
            having = self.having.to_sql(db)
            if having:
                sql += "\nHAVING\n" + indent(having)
        for union, kind in self.unions:
            sql += ("\nUNION ALL\n" if kind == "ALL" else "\nUNION\n") + union.to_sql(db)
        if self.order:
            order = [
                column.to_sql(db) + (f" {direction}" if direction else "")
                for column, direction in self.order
            ]
            sql += "\nORDER BY" + (" " if len(order) == 1 else "\n") + ",\n".join(order)
        sql += db.sql_limit_offset(self.limit, self.offset, bool(self.order))
        return sql

    def _sql_columns(self, db: Any) -> str:
        if not self.columns:
            return " *"
        columns = [
            column.to_sql(db) + (" AS " + db.quote_name(alias) if alias else "")
            for column, alias in self.columns
        ]
        return (" " if len(columns) == 1 else "\n") + ",\n".join(columns)

    def is_many(self) -> bool:
        return True
