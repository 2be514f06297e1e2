"""Schema reflection with per-connection caching.

Catalog queries are implemented by the dialects; this module caches their
results and derives the relationship maps used by records::

    schema = db.information_schema
    schema.belongs_to("tracks")   # {"artist": ForeignKey(tracks.artist_id -> artists.id)}
    schema.has_many("artists")    # {"tracks": ForeignKey(tracks.artist_id -> artists.id)}

Caches are never invalidated automatically; call purge() after DDL.
"""

import logging
import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from .dialects import is_blob_or_text

logger = logging.getLogger("dbapiext")


class ColumnInfo(BaseModel):
    """Reflected description of one column."""

    model_config = ConfigDict(frozen=True)

    name: str
    primary_key: bool = False
    type: str = ""
    default: Any = None
    nullable: bool = True
    is_blob_or_text: bool = False


class ForeignKey(BaseModel):
    """``table.column`` referencing ``referenced_table.referenced_column``."""

    model_config = ConfigDict(frozen=True)

    table: str
    column: str
    referenced_table: str
    referenced_column: str


class InformationSchema:
    """Cached view of the tables, columns and foreign keys of a connection.

    Raises MetaNotSupported (from the dialect) when the engine cannot be
    reflected; an unsupported engine never looks like an empty schema.
    """

    def __init__(self, db):
        self.db = db
        self._tables: Optional[list[str]] = None
        self._columns: dict[str, dict[str, ColumnInfo]] = {}
        self._foreign_keys: dict[str, list[ForeignKey]] = {}
        self._referencing_keys: dict[str, list[ForeignKey]] = {}
        self._belongs_to: dict[str, dict[str, ForeignKey]] = {}
        self._has_many: dict[str, dict[str, ForeignKey]] = {}

    def get_tables(self) -> list[str]:
        if self._tables is None:
            self._tables = self.db.dialect.reflect_tables(self.db)
        return self._tables

    def get_columns(self, table: str) -> dict[str, ColumnInfo]:
        """Columns of ``table`` keyed by name, in table order."""
        if table not in self._columns:
            logger.debug("Reflecting columns of %s", table)
            self._columns[table] = {
                column["name"]: ColumnInfo(
                    name=column["name"],
                    primary_key=bool(column["primary_key"]),
                    type=column["type"] or "",
                    default=column["default"],
                    nullable=bool(column.get("nullable", True)),
                    is_blob_or_text=is_blob_or_text(column["type"]),
                )
                for column in self.db.dialect.reflect_columns(self.db, table)
            }
        return self._columns[table]

    def get_foreign_keys(self, table: str) -> list[ForeignKey]:
        """Foreign keys declared on ``table``."""
        if table not in self._foreign_keys:
            self._foreign_keys[table] = [
                ForeignKey(**foreign_key)
                for foreign_key in self.db.dialect.reflect_foreign_keys(self.db, table)
            ]
        return self._foreign_keys[table]

    def get_referencing_keys(self, table: str) -> list[ForeignKey]:
        """Foreign keys of other tables pointing at ``table``."""
        if table not in self._referencing_keys:
            self._referencing_keys[table] = [
                ForeignKey(**foreign_key)
                for foreign_key in self.db.dialect.reflect_referencing_keys(self.db, table)
            ]
        return self._referencing_keys[table]

    def belongs_to(self, table: str) -> dict[str, ForeignKey]:
        """Outgoing foreign keys keyed by column name without its ``_id`` suffix."""
        if table not in self._belongs_to:
            self._belongs_to[table] = {
                re.sub(r"_id$", "", foreign_key.column): foreign_key
                for foreign_key in self.get_foreign_keys(table)
            }
        return self._belongs_to[table]

    def has_many(self, table: str) -> dict[str, ForeignKey]:
        """Incoming foreign keys keyed by referencing table name."""
        if table not in self._has_many:
            self._has_many[table] = {
                foreign_key.table: foreign_key
                for foreign_key in self.get_referencing_keys(table)
            }
        return self._has_many[table]

    def purge(self, table: Optional[str] = None) -> None:
        """Forget cached reflection, for one table or for all of them.

        Relationship maps are always cleared entirely, since a change to one
        table affects the keys seen from others.
        """
        if table is None:
            self._tables = None
            self._columns.clear()
            self._foreign_keys.clear()
        else:
            self._tables = None
            self._columns.pop(table, None)
            self._foreign_keys.pop(table, None)
        self._referencing_keys.clear()
        self._belongs_to.clear()
        self._has_many.clear()
