"""Database dialects: one class per engine (SQLite, MySQL, PostgreSQL, SQL Server)."""

import logging
from typing import Any

from .base import AnsiDialect, Dialect, is_blob_or_text
from .sqlite import SqliteDialect
from .mysql import MysqlDialect
from .postgres import PostgresDialect
from .sqlserver import SqlserverDialect

logger = logging.getLogger("dbapiext")

_DIALECT_CLASSES: tuple[type[Dialect], ...] = (
    SqliteDialect,
    MysqlDialect,
    PostgresDialect,
    SqlserverDialect,
)


def get_dialect_for_scheme(scheme: str) -> Dialect:
    """Return a Dialect instance for the given URL scheme (e.g. 'sqlite', 'mysql')."""
    normalized = (scheme or "").split("+")[0].lower()
    for dialect_cls in _DIALECT_CLASSES:
        if normalized in dialect_cls.SUPPORTED_SCHEMA:
            return dialect_cls()
    raise ValueError(f"Unsupported database scheme: {scheme}")


def get_dialect_for_connection(raw: Any) -> Dialect:
    """Return a Dialect instance for a raw DB-API connection, from its driver module.

    Unknown drivers get the ANSI dialect, which quotes like standard SQL but
    cannot reflect the schema.
    """
    module = type(raw).__module__.split(".")[0]
    for dialect_cls in _DIALECT_CLASSES:
        if module in dialect_cls.DRIVER_MODULES:
            return dialect_cls()
    logger.warning("Unknown database driver `%s`, falling back to ANSI quoting", module)
    return AnsiDialect()


__all__ = [
    "AnsiDialect",
    "Dialect",
    "SqliteDialect",
    "MysqlDialect",
    "PostgresDialect",
    "SqlserverDialect",
    "get_dialect_for_connection",
    "get_dialect_for_scheme",
    "is_blob_or_text",
]
