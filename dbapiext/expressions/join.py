"""JOIN clause of a query."""

from typing import Any, Optional

from ..utils.indent import indent
from ._bases import Expression, resolve_context
from .criteria import Criteria


class Join(Criteria):
    """``<join_type> <table> [AS alias]`` with its ON conditions as criteria.

    ``table`` is a table name or a sub-query.
    """

    table: Any
    join_type: str = "JOIN"
    alias: Optional[str] = None
    index_hint: Optional[str] = None

    def __init__(self, table: Any, join_type: str = "JOIN", alias: Optional[str] = None, **kwargs):
        kwargs.setdefault("conjunction", "AND")
        super().__init__(table=table, join_type=join_type.strip().upper(), alias=alias, **kwargs)

    def force_index(self, name: str) -> "Join":
        """Ask the engine to use index ``name`` for this join, where it has the syntax for it."""
        self.index_hint = name
        return self

    def to_sql(self, db: Any = None) -> str:
        db = resolve_context(db)
        if isinstance(self.table, Expression):
            target = "(" + indent(self.table.to_sql(db), True) + ")"
        else:
            target = db.quote_name(self.table)
        sql = f"{self.join_type} {target}"
        if self.alias:
            sql += " AS " + db.quote_name(self.alias)
        if self.index_hint:
            sql += db.sql_force_index(self.index_hint)
        on = super().to_sql(db)
        if on:
            sql += "\nON\n" + indent(on)
        return sql

    def is_many(self) -> bool:
        return False
