"""PostgreSQL dialect."""

import urllib.parse
from typing import Any, ClassVar

from .base import Dialect

_COLUMNS_SQL = """SELECT c.column_name AS "name", c.data_type AS "type",
  c.column_default AS "default", c.is_nullable = 'YES' AS "nullable",
  EXISTS (
    SELECT 1
    FROM pg_index i
    JOIN pg_attribute a ON a.attrelid = i.indrelid AND a.attnum = ANY(i.indkey)
    WHERE i.indrelid = (quote_ident(c.table_schema) || '.' || quote_ident(c.table_name))::regclass
    AND i.indisprimary
    AND a.attname = c.column_name
  ) AS "primary_key"
FROM information_schema.columns c
WHERE c.table_schema = current_schema() AND c.table_name = {table}
ORDER BY c.ordinal_position"""

_FOREIGN_KEYS_SQL = """SELECT kcu.table_name AS "table", kcu.column_name AS "column",
  ccu.table_name AS "referenced_table", ccu.column_name AS "referenced_column"
FROM information_schema.table_constraints tc
JOIN information_schema.key_column_usage kcu
  ON tc.constraint_name = kcu.constraint_name AND tc.table_schema = kcu.table_schema
JOIN information_schema.constraint_column_usage ccu
  ON ccu.constraint_name = tc.constraint_name AND ccu.table_schema = tc.table_schema
WHERE tc.constraint_type = 'FOREIGN KEY'
AND tc.table_schema = current_schema()
AND {column} = {table}
ORDER BY kcu.table_name, kcu.ordinal_position"""


class PostgresDialect(Dialect):
    """Dialect for PostgreSQL (scheme postgresql)."""

    NAME: ClassVar[str] = "postgresql"
    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ("postgresql", "postgres", "pgsql")
    DRIVER_MODULES: ClassVar[tuple[str, ...]] = ("psycopg2", "psycopg")
    PARAMSTYLE: ClassVar[str] = "pyformat"
    SUPPORTS_RETURNING: ClassVar[bool] = True

    def connect(self, url: str):
        import psycopg2
        parsed = urllib.parse.urlparse(url)
        return psycopg2.connect(
            host=parsed.hostname,
            user=parsed.username,
            password=parsed.password,
            database=(parsed.path or "")[1:] or None,
            port=parsed.port,
        )

    def quote_bool(self, value: bool) -> str:
        return "TRUE" if value else "FALSE"

    def quote_bytes(self, value: bytes) -> str:
        return "'\\x" + value.hex() + "'::bytea"

    def sql_force_index(self, name: str) -> str:
        # no index hints in PostgreSQL
        return ""

    def last_insert_id(self, db, cursor) -> Any:
        return db.fetch_value("SELECT lastval()")

    # reflection

    def reflect_tables(self, db) -> list[str]:
        rows = db.fetch_all(
            "SELECT table_name FROM information_schema.tables"
            " WHERE table_schema = current_schema() AND table_type = 'BASE TABLE'"
            " ORDER BY table_name"
        )
        return [row["table_name"] for row in rows]

    def reflect_columns(self, db, table: str) -> list[dict[str, Any]]:
        binder = db.binder()
        sql = _COLUMNS_SQL.format(table=binder.bind("table", table))
        return db.fetch_all(sql, binder.parameters)

    def reflect_foreign_keys(self, db, table: str) -> list[dict[str, str]]:
        binder = db.binder()
        sql = _FOREIGN_KEYS_SQL.format(column="kcu.table_name", table=binder.bind("table", table))
        return db.fetch_all(sql, binder.parameters)

    def reflect_referencing_keys(self, db, table: str) -> list[dict[str, str]]:
        binder = db.binder()
        sql = _FOREIGN_KEYS_SQL.format(column="ccu.table_name", table=binder.bind("table", table))
        return db.fetch_all(sql, binder.parameters)
