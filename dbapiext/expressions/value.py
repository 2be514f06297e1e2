"""Literal value, escaped by the quoting context."""

from typing import Any

from ._bases import Expression, resolve_context

_COLLECTIONS = (list, tuple, set, frozenset)


class Value(Expression):
    """A scalar, NULL, or a collection of scalars.

    Collections are "many" values: they render as a comma separated list and
    make a Criterion use ``IN``. An empty collection renders as ``NULL`` so
    that ``x IN (NULL)`` matches nothing.
    """

    value: Any = None

    def __init__(self, value: Any = None, **kwargs):
        super().__init__(value=value, **kwargs)

    def is_null(self) -> bool:
        return self.value is None

    def is_many(self) -> bool:
        return isinstance(self.value, _COLLECTIONS)

    def _items(self) -> list[Any]:
        if isinstance(self.value, (set, frozenset)):
            # sets have no order; keep rendering deterministic
            return sorted(self.value, key=lambda item: (type(item).__name__, item))
        return list(self.value)

    def to_sql(self, db: Any = None) -> str:
        db = resolve_context(db)
        if not self.is_many():
            return db.quote(self.value)
        items = self._items()
        if not items:
            return "NULL"
        return ", ".join(
            item.to_sql(db) if isinstance(item, Expression) else db.quote(item)
            for item in items
        )
