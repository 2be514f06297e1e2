"""Column reference, optionally qualified by table."""

import re
from typing import Any, Optional

from ._bases import Expression, resolve_context

_QUALIFIED = re.compile(r"^(.+)\.(.+)$")


class Field(Expression):
    """Reference to a column (``name``) or a qualified column (``users.name``).

    A ``*`` column is a wildcard and is never quoted.
    """

    name: str

    def __init__(self, name: str, **kwargs):
        super().__init__(name=name, **kwargs)

    @property
    def table(self) -> Optional[str]:
        match = _QUALIFIED.match(self.name)
        return match.group(1) if match else None

    @property
    def column(self) -> str:
        match = _QUALIFIED.match(self.name)
        return match.group(2) if match else self.name

    def to_sql(self, db: Any = None) -> str:
        db = resolve_context(db)
        if self.column == "*":
            if self.table:
                return db.quote_name(self.table) + ".*"
            return "*"
        return db.quote_name(self.name)
