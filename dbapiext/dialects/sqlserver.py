"""SQL Server dialect."""

import urllib.parse
from typing import Any, ClassVar, Optional

from .base import Dialect


class SqlserverDialect(Dialect):
    """Dialect for SQL Server (schemes mssql, sqlserver).

    Schema reflection is not available: the base implementation raises
    MetaNotSupported.
    """

    NAME: ClassVar[str] = "mssql"
    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ("mssql", "sqlserver")
    DRIVER_MODULES: ClassVar[tuple[str, ...]] = ("pyodbc", "pymssql")
    NAME_OPENING: ClassVar[str] = "["
    NAME_CLOSING: ClassVar[str] = "]"
    PARAMSTYLE: ClassVar[str] = "qmark"

    def connect(self, url: str):
        import pyodbc  # pylint: disable=import-outside-toplevel,import-error
        parsed = urllib.parse.urlparse(url)
        database = (parsed.path or "").lstrip("/") or None
        port = parsed.port or 1433
        server = parsed.hostname or "localhost"
        if port and port != 1433:
            server = f"{server},{port}"
        conn_str = (
            f"DRIVER={{ODBC Driver 17 for SQL Server}};"
            f"SERVER={server};"
            f"DATABASE={database or ''};"
            f"UID={parsed.username or ''};"
            f"PWD={parsed.password or ''}"
        )
        return pyodbc.connect(conn_str)

    def quote_bytes(self, value: bytes) -> str:
        return "0x" + value.hex().upper()

    def sql_limit_offset(self, limit: Optional[int], offset: Optional[int], ordered: bool) -> str:
        if not limit and not offset:
            return ""
        # OFFSET ... FETCH is only valid after an ORDER BY
        sql = "" if ordered else "\nORDER BY (SELECT NULL)"
        sql += f"\nOFFSET {offset or 0} ROWS"
        if limit:
            sql += f"\nFETCH NEXT {limit} ROWS ONLY"
        return sql

    def sql_force_index(self, name: str) -> str:
        return f" WITH (INDEX({self.quote_name(name)}))"

    def sql_begin(self) -> str:
        return "BEGIN TRANSACTION"

    def sql_commit(self) -> str:
        return "COMMIT TRANSACTION"

    def sql_rollback(self) -> str:
        return "ROLLBACK TRANSACTION"

    def sql_savepoint(self, name: str) -> str:
        return f"SAVE TRANSACTION {name}"

    def sql_release_savepoint(self, name: str) -> Optional[str]:
        # savepoints are released with the enclosing transaction
        return None

    def sql_rollback_to_savepoint(self, name: str) -> str:
        return f"ROLLBACK TRANSACTION {name}"

    def last_insert_id(self, db, cursor) -> Any:
        return db.fetch_value("SELECT @@IDENTITY")
