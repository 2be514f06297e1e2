"""Named and automatic scopes of a table gateway.

A scope adds conditions (or columns, joins...) to a Selection. Named scopes
are gateway methods called ``scope_<name>(selection, *args)``. Automatic
scopes are derived from their name, ``where_<column>_<predicate>``::

    users.where_name_like("A*")         # "users"."name" LIKE 'A%'
    users.where_deleted_at_is_null()    # "users"."deleted_at" IS NULL
    users.select().where_age_greater_than(18).with_name_length()

CamelCase spellings (``whereNameIs``, ``withNameLength``) are accepted too.
"""

import re
from typing import Any, Callable, Optional

from ..expressions import Criterion, Field, Literal
from ..utils.underscore import underscore

# tried in this order, so ``where_name_not_like`` is not read as column ``name_not``
PREDICATES: dict[str, Callable[..., Criterion]] = {
    "is_not_null": lambda db, field: Criterion(field, None, "!="),
    "is_null": lambda db, field: Criterion(field, None, "="),
    "is_not": lambda db, field, value: Criterion(field, value, "!="),
    "is": lambda db, field, value: Criterion(field, value, "="),
    "not_like": lambda db, field, value: Criterion(field, Literal(db.escape_like(value)), "NOT LIKE"),
    "like": lambda db, field, value: Criterion(field, Literal(db.escape_like(value)), "LIKE"),
    "greater_than": lambda db, field, value: Criterion(field, value, ">"),
    "lesser_than": lambda db, field, value: Criterion(field, value, "<"),
    "search": lambda db, field, value: Criterion(field, Literal(db.escape_like(f"*{value}*")), "LIKE"),
}

_NAMED_PREFIX = "scope_"


class ScopeRegistry:
    """Scopes available on one gateway, collected when the gateway is built."""

    def __init__(self, gateway):
        self.gateway = gateway
        self.named: dict[str, Callable[..., Any]] = {
            attribute[len(_NAMED_PREFIX):]: getattr(gateway, attribute)
            for attribute in dir(type(gateway))
            if attribute.startswith(_NAMED_PREFIX) and callable(getattr(type(gateway), attribute))
        }

    def resolve(self, name: str) -> Optional[Callable[..., Any]]:
        """Scope called ``name``, as a callable ``scope(selection, *args)``; None if there is none.

        Named scopes take precedence over automatic ones.
        """
        name = underscore(name)
        if name in self.named:
            return self.named[name]
        parsed = self.parse(name)
        if parsed is None:
            return None
        column, predicate = parsed
        field = Field(f"{self.gateway.get_table()}.{column}")
        build = PREDICATES[predicate]

        def apply(selection, *args):
            selection.add_criterion_object(build(self.gateway.db, field, *args))

        return apply

    def parse(self, name: str) -> Optional[tuple[str, str]]:
        """Split ``where_<column>_<predicate>`` into an existing column and a predicate."""
        if not name.startswith("where_"):
            return None
        for predicate in PREDICATES:
            match = re.match(rf"^where_(?P<column>.+)_{predicate}$", name)
            if match and match.group("column") in self.gateway.get_columns():
                return match.group("column"), predicate
        return None

    def names(self) -> list[str]:
        """Every scope name: named scopes, then one automatic scope per column and predicate."""
        return list(self.named) + [
            f"where_{column}_{predicate}"
            for column in self.gateway.get_columns()
            for predicate in PREDICATES
        ]
