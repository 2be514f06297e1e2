"""Raw SQL, inserted unescaped."""

from typing import Any

from ._bases import Expression


class Literal(Expression):
    """Trusted SQL text, or a list of fragments joined with commas."""

    sql: str | list[str]

    def __init__(self, sql: str | list[str], **kwargs):
        super().__init__(sql=sql, **kwargs)

    def is_many(self) -> bool:
        return isinstance(self.sql, list)

    def to_sql(self, db: Any = None) -> str:
        if isinstance(self.sql, list):
            return ", ".join(self.sql)
        return self.sql
