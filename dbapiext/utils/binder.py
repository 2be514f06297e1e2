"""Collect bound parameters in the paramstyle of a DB-API driver."""

import re
from typing import Any


class Binder:
    """Build placeholders for one statement and collect the matching parameters.

    ``paramstyle`` is the driver's DB-API paramstyle: ``named`` (``:name``),
    ``pyformat`` (``%(name)s``), ``qmark`` (``?``) or ``format`` (``%s``).
    """

    PARAMSTYLES = ("named", "pyformat", "qmark", "format")

    def __init__(self, paramstyle: str = "named"):
        if paramstyle not in self.PARAMSTYLES:
            raise ValueError(f"Unsupported paramstyle: {paramstyle}")
        self.paramstyle = paramstyle
        self._names: list[str] = []
        self._values: list[Any] = []

    def bind(self, name: str, value: Any) -> str:
        """Register ``value`` and return the placeholder to put in the SQL."""
        name = re.sub(r"\W", "_", name) or "p"
        if name in self._names:
            suffix = 2
            while f"{name}_{suffix}" in self._names:
                suffix += 1
            name = f"{name}_{suffix}"
        self._names.append(name)
        self._values.append(value)
        if self.paramstyle == "named":
            return f":{name}"
        if self.paramstyle == "pyformat":
            return f"%({name})s"
        if self.paramstyle == "qmark":
            return "?"
        return "%s"

    def inline(self, sql: str) -> str:
        """Escape a rendered SQL fragment for use next to placeholders.

        Percent-based paramstyles treat ``%`` as a format character once
        parameters are passed, so literal percent signs must be doubled.
        """
        if self.paramstyle in ("pyformat", "format"):
            return sql.replace("%", "%%")
        return sql

    @property
    def parameters(self) -> dict[str, Any] | list[Any]:
        """Parameters to hand to ``cursor.execute()`` alongside the SQL."""
        if self.paramstyle in ("named", "pyformat"):
            return dict(zip(self._names, self._values))
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)
