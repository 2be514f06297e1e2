"""Turn DB-API cursor rows into dicts keyed by column name."""

from typing import Any, Optional

from ..errors import AmbiguousResultset


def column_names(cursor) -> list[str]:
    """Names of the columns described by ``cursor``; duplicates raise AmbiguousResultset."""
    names = [description[0] for description in (cursor.description or ())]
    seen = set()
    for name in names:
        if name in seen:
            raise AmbiguousResultset(
                f"Column `{name}` appears more than once in the resultset; use aliases"
            )
        seen.add(name)
    return names


def fetch_assoc(cursor) -> Optional[dict[str, Any]]:
    """Fetch the next row of ``cursor`` as a dict, or None when exhausted."""
    row = cursor.fetchone()
    if row is None:
        return None
    return dict(zip(column_names(cursor), row))


def fetch_all_assoc(cursor) -> list[dict[str, Any]]:
    """Fetch all remaining rows of ``cursor`` as dicts."""
    names = column_names(cursor)
    return [dict(zip(names, row)) for row in cursor.fetchall()]
