"""SQLite dialect."""

import logging
import urllib.parse
from typing import Any, ClassVar, Optional

from .base import Dialect

logger = logging.getLogger("dbapiext")


class SqliteDialect(Dialect):
    """Dialect for SQLite (scheme sqlite)."""

    NAME: ClassVar[str] = "sqlite"
    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ("sqlite",)
    DRIVER_MODULES: ClassVar[tuple[str, ...]] = ("sqlite3",)
    PARAMSTYLE: ClassVar[str] = "named"

    def connect(self, url: str):
        import sqlite3
        parsed = urllib.parse.urlparse(url)
        path = (parsed.path or "")[1:] or parsed.hostname or ":memory:"
        logger.info("Connecting to SQLite database %s", path)
        return sqlite3.connect(path)

    def prepare_connection(self, raw: Any) -> None:
        # no implicit BEGIN from the sqlite3 module
        raw.isolation_level = None
        raw.execute("PRAGMA foreign_keys = ON")

    def sql_limit_offset(self, limit: Optional[int], offset: Optional[int], ordered: bool) -> str:
        if offset and not limit:
            return f"\nLIMIT -1\nOFFSET {offset}"
        return super().sql_limit_offset(limit, offset, ordered)

    def sql_force_index(self, name: str) -> str:
        return f" INDEXED BY {self.quote_name(name)}"

    # reflection

    def reflect_tables(self, db) -> list[str]:
        rows = db.fetch_all(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
        )
        return [row["name"] for row in rows]

    def reflect_columns(self, db, table: str) -> list[dict[str, Any]]:
        return [
            {
                "name": row["name"],
                "primary_key": int(row["pk"]) > 0,
                "type": row["type"] or "",
                "default": row["dflt_value"],
                "nullable": not row["notnull"] and not int(row["pk"]) > 0,
            }
            for row in db.fetch_all(f"PRAGMA table_info({self.quote_name(table)})")
        ]

    def reflect_foreign_keys(self, db, table: str) -> list[dict[str, str]]:
        foreign_keys = []
        for row in db.fetch_all(f"PRAGMA foreign_key_list({self.quote_name(table)})"):
            referenced_column = row["to"]
            if referenced_column is None:
                referenced_column = self._implicit_referenced_column(db, row["table"])
            foreign_keys.append({
                "table": table,
                "column": row["from"],
                "referenced_table": row["table"],
                "referenced_column": referenced_column,
            })
        return foreign_keys

    def _implicit_referenced_column(self, db, table: str) -> str:
        """Column targeted by ``REFERENCES table`` without an explicit column list."""
        for column in self.reflect_columns(db, table):
            if column["primary_key"]:
                return column["name"]
        return "id"
