"""MySQL dialect."""

import urllib.parse
from typing import Any, ClassVar, Optional

from .base import Dialect

_ESCAPES = {
    "\0": "\\0",
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\x1a": "\\Z",
    "'": "\\'",
    '"': '\\"',
}

# largest LIMIT MySQL accepts, for an OFFSET without a LIMIT
_MAX_LIMIT = 18446744073709551615


class MysqlDialect(Dialect):
    """Dialect for MySQL (scheme mysql)."""

    NAME: ClassVar[str] = "mysql"
    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ("mysql", "mariadb")
    DRIVER_MODULES: ClassVar[tuple[str, ...]] = ("pymysql", "MySQLdb")
    NAME_OPENING: ClassVar[str] = "`"
    NAME_CLOSING: ClassVar[str] = "`"
    PARAMSTYLE: ClassVar[str] = "pyformat"

    def connect(self, url: str):
        import pymysql  # pylint: disable=import-outside-toplevel,import-error
        parsed = urllib.parse.urlparse(url)
        return pymysql.connect(
            host=parsed.hostname,
            user=parsed.username,
            password=parsed.password,
            database=(parsed.path or "")[1:] or None,
            port=parsed.port or 3306,
        )

    def prepare_connection(self, raw: Any) -> None:
        raw.autocommit(True)

    def quote_string(self, value: str) -> str:
        return "'" + "".join(_ESCAPES.get(character, character) for character in value) + "'"

    def supports_sql_calc_found_rows(self) -> bool:
        return True

    def supports_straight_join(self) -> bool:
        return True

    def sql_found_rows(self) -> Optional[str]:
        return "SELECT FOUND_ROWS()"

    def sql_limit_offset(self, limit: Optional[int], offset: Optional[int], ordered: bool) -> str:
        if offset and not limit:
            return f"\nLIMIT {_MAX_LIMIT}\nOFFSET {offset}"
        return super().sql_limit_offset(limit, offset, ordered)

    def sql_insert_default_values(self, table: str) -> str:
        return f"INSERT INTO {self.quote_name(table)} () VALUES ()"

    def sql_begin(self) -> str:
        return "START TRANSACTION"

    # reflection

    def reflect_tables(self, db) -> list[str]:
        return [next(iter(row.values())) for row in db.fetch_all("SHOW TABLES")]

    def reflect_columns(self, db, table: str) -> list[dict[str, Any]]:
        return [
            {
                "name": row["Field"],
                "primary_key": row["Key"] == "PRI",
                "type": row["Type"],
                "default": row["Default"],
                "nullable": row["Null"] == "YES",
            }
            for row in db.fetch_all(f"SHOW COLUMNS FROM {self.quote_name(table)}")
        ]

    def reflect_foreign_keys(self, db, table: str) -> list[dict[str, str]]:
        return self._key_column_usage(db, "TABLE_NAME", table)

    def reflect_referencing_keys(self, db, table: str) -> list[dict[str, str]]:
        return self._key_column_usage(db, "REFERENCED_TABLE_NAME", table)

    def _key_column_usage(self, db, column: str, table: str) -> list[dict[str, str]]:
        binder = db.binder()
        sql = (
            "SELECT TABLE_NAME AS `table`, COLUMN_NAME AS `column`,"
            " REFERENCED_TABLE_NAME AS `referenced_table`,"
            " REFERENCED_COLUMN_NAME AS `referenced_column`"
            "\nFROM information_schema.KEY_COLUMN_USAGE"
            "\nWHERE TABLE_SCHEMA = DATABASE()"
            " AND REFERENCED_TABLE_NAME IS NOT NULL"
            f" AND {column} = {binder.bind('table', table)}"
            "\nORDER BY TABLE_NAME, ORDINAL_POSITION"
        )
        return db.fetch_all(sql, binder.parameters)
