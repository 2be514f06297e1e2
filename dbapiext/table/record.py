"""Active record: a table row with column and relationship access."""

from typing import Any, Iterator, Optional

from ..errors import BadMethodCall
from ..expressions import Literal
from ..utils.underscore import underscore


class Record:
    """A row of ``tablename``.

    Columns read as attributes or items (``track.name``, ``track["name"]``).
    Foreign keys add relationships, resolved through the connection's
    information schema: ``track.artist`` fetches the artist a track belongs
    to, ``artist.tracks`` selects the tracks referencing an artist.

    Validation hooks of the gateway report problems in ``errors``.
    """

    def __init__(self, row: Optional[dict[str, Any]] = None, tablename: Optional[str] = None, db=None):
        self._row = dict(row or {})
        self._tablename = tablename
        self._db = db
        self.errors: list[str] = []

    # columns

    def get(self, column: str, default: Any = None) -> Any:
        return self._row.get(underscore(column), default)

    def set(self, column: str, value: Any) -> None:
        """Set a column; columns missing from the row must exist in the table."""
        column = underscore(column)
        if column not in self._row and column not in self._table_columns():
            raise BadMethodCall(f"Undefined property `{column}` on table `{self._tablename}`")
        self._row[column] = value

    def get_array_copy(self) -> dict[str, Any]:
        """The row as a new dict."""
        return dict(self._row)

    def _table_columns(self) -> dict[str, Any]:
        if self._db is None or self._tablename is None:
            return {}
        return self._db.information_schema.get_columns(self._tablename)

    # relationships

    def has_relation(self, name: str) -> bool:
        if self._db is None:
            return False
        name = underscore(name)
        schema = self._db.information_schema
        return name in schema.belongs_to(self._tablename) or name in schema.has_many(self._tablename)

    def relation(self, name: str) -> Any:
        """Follow a relationship.

        Returns:
            For a belongs-to relationship, the referenced record (or None when
            the key is NULL); for a has-many relationship, a Selection of the
            referencing rows.

        Raises:
            BadMethodCall: ``name`` is not a relationship of the table.
        """
        name = underscore(name)
        if self._db is None:
            raise BadMethodCall(f"Record of `{self._tablename}` has no connection to resolve `{name}`")
        schema = self._db.information_schema
        belongs_to = schema.belongs_to(self._tablename)
        if name in belongs_to:
            foreign_key = belongs_to[name]
            value = self._row.get(foreign_key.column)
            if value is None:
                return None
            return self._db.table(foreign_key.referenced_table).fetch({foreign_key.referenced_column: value})
        has_many = schema.has_many(self._tablename)
        if name in has_many:
            foreign_key = has_many[name]
            selection = self._db.table(foreign_key.table).select()
            value = self._row.get(foreign_key.referenced_column)
            if value is None:
                # an unsaved row has no children
                selection.add_criterion_object(Literal("1 = 0"))
                return selection
            return selection.where(foreign_key.column, value)
        raise BadMethodCall(f"No relation `{name}` on table `{self._tablename}`")

    # attribute and item access

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        column = underscore(name)
        if column in self._row:
            return self._row[column]
        return self.relation(column)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_") or name == "errors":
            object.__setattr__(self, name, value)
        else:
            self.set(name, value)

    def __getitem__(self, key: str) -> Any:
        column = underscore(key)
        if column in self._row:
            return self._row[column]
        if self.has_relation(column):
            return self.relation(column)
        raise KeyError(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        del self._row[underscore(key)]

    def __contains__(self, key: str) -> bool:
        return underscore(key) in self._row or self.has_relation(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self._row)

    def __len__(self) -> int:
        return len(self._row)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self._tablename == other._tablename and self._row == other._row

    __hash__ = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._tablename} {self._row!r}>"
