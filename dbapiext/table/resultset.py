"""Forward-only resultset hydrating rows through a loader."""

from typing import Any

from ..errors import CannotRewindResultset
from ..utils.rows import fetch_assoc

_UNSET = object()


class Resultset:
    """Iterate over a cursor, turning each row (a dict) into ``loader.load(row)``.

    Rows are fetched one at a time. The cursor cannot seek, so iterating
    again once a row has been consumed raises CannotRewindResultset.
    """

    def __init__(self, cursor, loader=None):
        self.cursor = cursor
        self.loader = loader
        self._key = 0
        self._current: Any = _UNSET
        self._yielded = False

    def _load(self, row):
        if row is None or self.loader is None:
            return row
        return self.loader.load(row)

    def current(self) -> Any:
        """Row at the current position (None past the end); fetched once until next()."""
        if self._current is _UNSET:
            self._current = self._load(fetch_assoc(self.cursor))
        return self._current

    def key(self) -> int:
        return self._key

    def next(self) -> Any:
        self._key += 1
        self._current = _UNSET
        return self.current()

    def valid(self) -> bool:
        return self.current() is not None

    def rewind(self) -> None:
        if self._key > 0 or self._yielded:
            raise CannotRewindResultset("Can't rewind database resultset")

    def __iter__(self) -> "Resultset":
        self.rewind()
        return self

    def __next__(self) -> Any:
        if self._yielded:
            self.next()
        current = self.current()
        if current is None:
            raise StopIteration
        self._yielded = True
        return current
