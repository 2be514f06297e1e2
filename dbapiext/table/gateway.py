"""Table gateway: CRUD and selections for one table."""

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any, Optional

from pydantic import BaseModel

from ..errors import (
    BadMethodCall,
    CouldNotDeterminePrimaryKey,
    IllegalCondition,
    NoConditionsGiven,
    UnableToMarshal,
)
from ..expressions import Expression
from ..information_schema import ColumnInfo
from .record import Record
from .resultset import Resultset
from .scopes import ScopeRegistry
from .selection import Selection

logger = logging.getLogger("dbapiext")


class TableGateway:
    """CRUD and query entry point for ``tablename`` on ``db``.

    Columns and primary key are reflected from the database. Entities passed
    to insert(), update() and save() may be dicts, records, pydantic models or
    plain objects (see marshal()).

    Subclass to customize: override load() to hydrate rows into your own
    objects, the validate hooks to reject entities, and add ``scope_<name>``
    methods for named scopes. Register subclasses with
    ``Connection.register_gateway``.

    Args:
        tablename: Table name.
        db: Connection.
        cache: Keep records fetched by primary key, until the next update or
            delete through this gateway.
    """

    def __init__(self, tablename: str, db, *, cache: bool = False):
        self.tablename = tablename
        self.db = db
        self.cache = cache
        self._pkey: Optional[list[str]] = None
        self._records: dict[tuple, Any] = {}
        self.scopes = ScopeRegistry(self)

    # schema

    def get_table(self) -> str:
        return self.tablename

    def reflect(self) -> dict[str, ColumnInfo]:
        return self.db.information_schema.get_columns(self.tablename)

    def get_columns(self) -> list[str]:
        return list(self.reflect())

    def get_listable_columns(self) -> list[str]:
        """Columns that are not TEXT/BLOB, suitable for listings."""
        return [name for name, column in self.reflect().items() if not column.is_blob_or_text]

    def get_pkey(self) -> list[str]:
        """Primary key columns; a table without a declared key falls back on its ``id`` column.

        Raises:
            CouldNotDeterminePrimaryKey: No primary key and no ``id`` column.
        """
        if self._pkey is None:
            columns = self.reflect()
            pkey = [name for name, column in columns.items() if column.primary_key]
            if not pkey and "id" in columns:
                pkey = ["id"]
            if not pkey:
                raise CouldNotDeterminePrimaryKey(f"Could not determine primary key of `{self.tablename}`")
            self._pkey = pkey
        return self._pkey

    # hydration

    def load(self, row: dict[str, Any]) -> Any:
        """Turn a row into a record, built by the record factory registered for the table."""
        return self.db.record_factory(self.tablename)(row, self.tablename, self.db)

    def create(self) -> Any:
        """A new, empty record."""
        return self.load({})

    def marshal(self, entity: Any) -> dict[str, Any]:
        """Column/value mapping of an entity.

        Raises:
            UnableToMarshal: ``entity`` is not a mapping, a record, a pydantic
                model or an object with attributes.
        """
        if isinstance(entity, Mapping):
            return dict(entity)
        if hasattr(type(entity), "get_array_copy"):
            return dict(entity.get_array_copy())
        if isinstance(entity, BaseModel):
            return entity.model_dump()
        if hasattr(entity, "__dict__"):
            return {
                key: value
                for key, value in vars(entity).items()
                if not key.startswith("_") and key != "errors"
            }
        raise UnableToMarshal(f"Unable to marshal {type(entity).__name__} into a mapping")

    # validation

    def clear_errors(self, entity: Any) -> None:
        if isinstance(entity, Mapping):
            return
        if isinstance(entity, BaseModel) and "errors" not in type(entity).model_fields:
            return
        if hasattr(entity, "__dict__"):
            entity.errors = []

    def has_errors(self, entity: Any) -> bool:
        if isinstance(entity, Mapping):
            return False
        return bool(getattr(entity, "errors", None))

    def validate(self, entity: Any) -> None:
        """Hook run before insert and update; append to ``entity.errors`` to abort."""

    def validate_insert(self, entity: Any) -> None:
        """Hook run before insert; append to ``entity.errors`` to abort."""

    def validate_update(self, entity: Any) -> None:
        """Hook run before update; append to ``entity.errors`` to abort."""

    # statements

    def _sql_value(self, column: str, value: Any, binder) -> str:
        if isinstance(value, Expression):
            return binder.inline(value.to_sql(self.db))
        return binder.bind(column, value)

    def _sql_where(self, condition: Any, binder, prefix: str = "") -> str:
        condition = self.marshal(condition)
        if not condition:
            raise NoConditionsGiven(f"No conditions given for `{self.tablename}`")
        where = []
        for column, value in condition.items():
            if not column:
                raise IllegalCondition(f"Illegal condition on `{self.tablename}`: empty column name")
            if value is None:
                where.append(f"{self.db.quote_name(column)} IS NULL")
            else:
                where.append(f"{self.db.quote_name(column)} = {self._sql_value(prefix + column, value, binder)}")
        return "\nWHERE\n  " + "\n  AND ".join(where)

    def _cache_key(self, condition: dict[str, Any]) -> Optional[tuple]:
        if not self.cache or set(condition) != set(self.get_pkey()):
            return None
        if any(isinstance(value, Expression) for value in condition.values()):
            return None
        return tuple(condition[column] for column in self.get_pkey())

    def find(self, *pk: Any) -> Any:
        """Fetch a record by primary key value(s), in key column order."""
        pkey = self.get_pkey()
        if len(pk) != len(pkey):
            raise IllegalCondition(f"`{self.tablename}` has a primary key of {len(pkey)} column(s), got {len(pk)} value(s)")
        return self.fetch(dict(zip(pkey, pk)))

    def fetch(self, condition: Any) -> Any:
        """First record matching all ``column = value`` pairs of ``condition``, or None.

        Values are bound as parameters; expressions are rendered inline and
        None matches NULL.
        """
        condition = self.marshal(condition)
        key = self._cache_key(condition)
        if key is not None and key in self._records:
            return self._records[key]
        binder = self.db.binder()
        sql = f"SELECT * FROM {self.db.quote_name(self.tablename)}" + self._sql_where(condition, binder)
        row = self.db.fetch_one(sql, binder.parameters)
        record = None if row is None else self.load(row)
        if key is not None and record is not None:
            self._records[key] = record
        return record

    def insert(self, entity: Any) -> Any:
        """Insert an entity.

        Returns:
            The generated id, or None if validation failed (see
            ``entity.errors``).
        """
        self.clear_errors(entity)
        self.validate_insert(entity)
        self.validate(entity)
        if self.has_errors(entity):
            return None
        data = self.marshal(entity)
        binder = self.db.binder()
        columns = []
        values = []
        for column in self.get_columns():
            if column in data:
                columns.append(self.db.quote_name(column))
                values.append(self._sql_value(column, data[column], binder))
        if columns:
            sql = (
                f"INSERT INTO {self.db.quote_name(self.tablename)} ({', '.join(columns)})"
                f" VALUES ({', '.join(values)})"
            )
        else:
            sql = self.db.dialect.sql_insert_default_values(self.tablename)
        if self.db.dialect.SUPPORTS_RETURNING:
            pkey = self._pkey_if_any()
            if not pkey:
                self.db.execute(sql, binder.parameters)
                return None
            sql += "\nRETURNING " + ", ".join(self.db.quote_name(column) for column in pkey)
            row = self.db.pexecute(sql, binder.parameters).fetchone()
            return row[0] if len(pkey) == 1 else tuple(row)
        cursor = self.db.pexecute(sql, binder.parameters)
        return self.db.last_insert_id(cursor)

    def _pkey_if_any(self) -> list[str]:
        try:
            return self.get_pkey()
        except CouldNotDeterminePrimaryKey:
            return []

    def update(self, entity: Any, condition: Any = None) -> bool:
        """Update rows matching ``condition`` (by default, the entity's primary key).

        Primary key columns are never part of the SET clause.

        Returns:
            False if validation failed (see ``entity.errors``), else True.

        Raises:
            NoConditionsGiven: No condition and the entity has no primary key value.
        """
        self.clear_errors(entity)
        self.validate_update(entity)
        self.validate(entity)
        if self.has_errors(entity):
            return False
        data = self.marshal(entity)
        if condition is None:
            pkey = self.get_pkey()
            condition = {}
            for column in pkey:
                if data.get(column) is None:
                    raise NoConditionsGiven(f"No conditions given and primary key `{column}` is missing for update")
                condition[column] = data[column]
        else:
            pkey = self._pkey_if_any()
        binder = self.db.binder()
        assignments = [
            f"{self.db.quote_name(column)} = {self._sql_value(column, data[column], binder)}"
            for column in self.get_columns()
            if column in data and column not in pkey
        ]
        where = self._sql_where(condition, binder, prefix="where_")
        if assignments:
            sql = f"UPDATE {self.db.quote_name(self.tablename)}\nSET\n  " + ",\n  ".join(assignments) + where
            self.db.execute(sql, binder.parameters)
        self._records.clear()
        return True

    def save(self, entity: Any) -> Any:
        """Insert the entity if its primary key is empty, else update it.

        After an insert the generated key is written back to dicts, records
        and plain objects.

        Raises:
            IllegalCondition: The table has a composite primary key.
        """
        pkey = self.get_pkey()
        if len(pkey) != 1:
            raise IllegalCondition(f"save() needs a single column primary key, `{self.tablename}` has {pkey}")
        column = pkey[0]
        if self.marshal(entity).get(column) is not None:
            return self.update(entity)
        generated = self.insert(entity)
        if generated is not None:
            if isinstance(entity, (MutableMapping, Record)):
                entity[column] = generated
            elif hasattr(entity, "__dict__") and not isinstance(entity, BaseModel):
                setattr(entity, column, generated)
        return generated

    def delete(self, condition: Any) -> bool:
        """Delete rows matching ``condition``; True if any row was deleted."""
        binder = self.db.binder()
        sql = f"DELETE FROM {self.db.quote_name(self.tablename)}" + self._sql_where(condition, binder)
        deleted = self.db.execute(sql, binder.parameters)
        self._records.clear()
        return deleted > 0

    # selections

    def select(self) -> Selection:
        return Selection(self)

    def where(self, left: Any, *arguments: Any) -> Selection:
        return self.select().where(left, *arguments)

    def paginate(self, page: int, page_size: int = 10) -> Selection:
        return self.select().paginate(page, page_size)

    def query(self, statement: Any) -> Resultset:
        """Run a statement (SQL or Query) and hydrate its rows."""
        return Resultset(self.db.query(statement), self)

    def pexecute(self, sql: str, parameters: Any = None) -> Resultset:
        """Run a statement with bound parameters and hydrate its rows."""
        return Resultset(self.db.pexecute(sql, parameters), self)

    def count(self) -> int:
        return int(self.db.fetch_value(f"SELECT count(*) FROM {self.db.quote_name(self.tablename)}"))

    def __len__(self) -> int:
        return self.count()

    def __iter__(self):
        return iter(self.select())

    # scopes

    def scope(self, name: str, *args: Any) -> Selection:
        """New selection with scope ``name`` applied."""
        return self.apply_scope(self.select(), name, *args)

    def apply_scope(self, selection: Selection, name: str, *args: Any) -> Selection:
        scope = self.scopes.resolve(name)
        if scope is None:
            raise BadMethodCall(f"No scope `{name}` on table `{self.tablename}`")
        scope(selection, *args)
        return selection

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_") or "scopes" not in self.__dict__:
            raise AttributeError(name)

        def apply(*args):
            return self.scope(name, *args)

        if self.scopes.resolve(name) is None:
            raise BadMethodCall(f"No scope `{name}` on table `{self.tablename}`")
        return apply
