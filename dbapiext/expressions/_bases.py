"""Base expression type for SQL expression trees."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from ..dialects import AnsiDialect, Dialect


def resolve_context(db: Any = None) -> Any:
    """Return the quoting context to render with.

    ``db`` may be a Dialect, anything exposing a ``dialect`` attribute (such
    as a Connection), or None for standard SQL quoting.
    """
    if db is None:
        return AnsiDialect()
    if isinstance(db, Dialect):
        return db
    return getattr(db, "dialect", db)


class Expression(BaseModel):
    """Base type for all SQL expression nodes.

    Subclasses implement ``to_sql``. Rendering is a pure function of the node
    and the quoting context: no node holds a live connection. ``is_many`` and
    ``is_null`` tell a Criterion whether the node stands for several values
    (rendered with ``IN``) or for NULL (rendered with ``IS NULL``).
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def to_sql(self, db: Any = None) -> str:
        """SQL fragment for this expression, quoted for ``db``."""
        raise NotImplementedError("Subclasses must implement `to_sql`")

    def is_many(self) -> bool:
        return False

    def is_null(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.to_sql()
