"""Base Dialect type: quoting, capabilities and catalog queries for one engine."""

import datetime
import decimal
import enum
import logging
import math
import re
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict

from ..errors import MetaNotSupported

logger = logging.getLogger("dbapiext")

_BLOB_OR_TEXT = re.compile(r"(TEXT|BLOB|CLOB)", re.IGNORECASE)


def is_blob_or_text(column_type: str) -> bool:
    """Whether a declared column type holds large text or binary data."""
    return bool(_BLOB_OR_TEXT.search(column_type or ""))


class Dialect(BaseModel, ABC):
    """Base for database dialects.

    A dialect is the single point of variance between engines: identifier and
    literal quoting, optional SQL modifiers, transaction statements, limit
    syntax and the system catalog queries used for reflection. Subclasses
    implement connect() for a given URL.
    """

    model_config = ConfigDict(frozen=True)

    NAME: ClassVar[str] = "ansi"
    """Short engine name, also used to key dialect-specific gateway registrations."""

    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ()
    """URL schemes this dialect handles (e.g. ('sqlite',), ('mssql', 'sqlserver'))."""

    DRIVER_MODULES: ClassVar[tuple[str, ...]] = ()
    """Top-level module names of DB-API drivers speaking this dialect."""

    NAME_OPENING: ClassVar[str] = '"'
    NAME_CLOSING: ClassVar[str] = '"'

    PARAMSTYLE: ClassVar[str] = "qmark"
    """DB-API paramstyle of the default driver for this dialect."""

    SUPPORTS_RETURNING: ClassVar[bool] = False

    @abstractmethod
    def connect(self, url: str) -> Any:
        """Return a new raw driver connection for the given URL.

        The return value is engine-specific (e.g. sqlite3.Connection, pymysql.Connection).
        """
        ...  # pylint: disable=unnecessary-ellipsis

    def prepare_connection(self, raw: Any) -> None:
        """Put a raw driver connection in autocommit mode.

        Transactions are then driven explicitly with sql_begin() and sql_commit().
        """
        raw.autocommit = True

    # quoting

    def quote_name(self, name: str) -> str:
        """Quote an identifier, each dot-separated segment on its own."""
        closing = self.NAME_CLOSING
        return ".".join(
            self.NAME_OPENING + segment.replace(closing, closing + closing) + closing
            for segment in str(name).split(".")
        )

    def quote(self, value: Any) -> str:
        """Render a Python value as a SQL literal."""
        if value is None:
            return "NULL"
        if isinstance(value, enum.Enum):
            return self.quote(value.value)
        if isinstance(value, bool):
            return self.quote_bool(value)
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            if not math.isfinite(value):
                raise ValueError(f"Cannot represent {value!r} as a SQL literal")
            return repr(value)
        if isinstance(value, decimal.Decimal):
            if not value.is_finite():
                raise ValueError(f"Cannot represent {value!r} as a SQL literal")
            return str(value)
        if isinstance(value, str):
            return self.quote_string(value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return self.quote_bytes(bytes(value))
        if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
            if isinstance(value, datetime.datetime):
                return self.quote_string(value.isoformat(sep=" "))
            return self.quote_string(value.isoformat())
        raise TypeError(f"Cannot quote value of type {type(value).__name__}")

    def quote_bool(self, value: bool) -> str:
        return "1" if value else "0"

    def quote_string(self, value: str) -> str:
        return "'" + value.replace("'", "''") + "'"

    def quote_bytes(self, value: bytes) -> str:
        return "X'" + value.hex().upper() + "'"

    def escape_like(self, value: str, wildcard: str = "*") -> str:
        """Quote ``value`` for LIKE, turning ``wildcard`` into ``%``.

        Literal ``%`` and ``_`` in ``value`` are left as is.
        """
        return self.quote(value.replace(wildcard, "%") if wildcard else value)

    # capabilities

    def supports_sql_calc_found_rows(self) -> bool:
        return False

    def supports_straight_join(self) -> bool:
        return False

    def sql_found_rows(self) -> Optional[str]:
        """Statement returning the row count of the last SQL_CALC_FOUND_ROWS query."""
        return None

    # statement fragments

    def sql_limit_offset(self, limit: Optional[int], offset: Optional[int], ordered: bool) -> str:
        """LIMIT/OFFSET tail of a SELECT; empty when neither is set."""
        sql = ""
        if limit:
            sql += f"\nLIMIT {limit}"
        if offset:
            sql += f"\nOFFSET {offset}"
        return sql

    def sql_force_index(self, name: str) -> str:
        return f"\nFORCE INDEX ({self.quote_name(name)})"

    def sql_insert_default_values(self, table: str) -> str:
        return f"INSERT INTO {self.quote_name(table)} DEFAULT VALUES"

    def sql_begin(self) -> str:
        return "BEGIN"

    def sql_commit(self) -> str:
        return "COMMIT"

    def sql_rollback(self) -> str:
        return "ROLLBACK"

    def sql_savepoint(self, name: str) -> str:
        return f"SAVEPOINT {name}"

    def sql_release_savepoint(self, name: str) -> Optional[str]:
        return f"RELEASE SAVEPOINT {name}"

    def sql_rollback_to_savepoint(self, name: str) -> str:
        return f"ROLLBACK TO SAVEPOINT {name}"

    def last_insert_id(self, db, cursor) -> Any:
        """Id generated by the last INSERT executed through ``cursor``."""
        return cursor.lastrowid

    # reflection

    def reflect_tables(self, db) -> list[str]:
        raise MetaNotSupported(f"Schema reflection is not supported for dialect `{self.NAME}`")

    def reflect_columns(self, db, table: str) -> list[dict[str, Any]]:
        """Column descriptions of ``table``.

        Each entry has the keys ``name``, ``primary_key``, ``type``,
        ``default`` and ``nullable``.
        """
        raise MetaNotSupported(f"Schema reflection is not supported for dialect `{self.NAME}`")

    def reflect_foreign_keys(self, db, table: str) -> list[dict[str, str]]:
        """Outgoing foreign keys of ``table``.

        Each entry has the keys ``table``, ``column``, ``referenced_table``
        and ``referenced_column``.
        """
        raise MetaNotSupported(f"Schema reflection is not supported for dialect `{self.NAME}`")

    def reflect_referencing_keys(self, db, table: str) -> list[dict[str, str]]:
        """Foreign keys of other tables pointing at ``table``.

        The default scans the outgoing keys of every table, for engines whose
        catalog has no reverse lookup.
        """
        return [
            foreign_key
            for other in self.reflect_tables(db)
            for foreign_key in self.reflect_foreign_keys(db, other)
            if foreign_key["referenced_table"] == table
        ]


class AnsiDialect(Dialect):
    """Standard SQL quoting, used when rendering without a connection or for unknown drivers."""

    NAME: ClassVar[str] = "ansi"

    def connect(self, url: str):
        raise ValueError("The ANSI dialect cannot open connections")

    def prepare_connection(self, raw: Any) -> None:
        logger.warning("Leaving %s connection in its default transaction mode", type(raw).__module__)
