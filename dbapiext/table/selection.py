"""Query bound to a table gateway, with pagination and counting."""

import math
from typing import Any, Optional

from pydantic import Field as PydanticField, PrivateAttr

from ..errors import BadMethodCall, MoreThanOneRowReturned
from ..expressions import Literal
from ..query import Query
from .resultset import Resultset


class Selection(Query):
    """SELECT on the table of ``gateway``, iterated as records.

    The query runs once, on first iteration (or first count); rows are
    hydrated by ``gateway.load``. Scopes of the gateway can be chained::

        for user in users.select().where_name_like("A*").paginate(2, 20):
            ...

    With a page set, the total number of rows comes from MySQL's
    ``SQL_CALC_FOUND_ROWS`` when available (and ``found_rows`` is left on),
    otherwise from a ``count(*)`` wrapped around the selection.
    """

    gateway: Any = PydanticField(exclude=True)
    db: Any = PydanticField(exclude=True)
    current_page: Optional[int] = None
    page_size: Optional[int] = None
    found_rows: bool = True

    _result: Optional[Resultset] = PrivateAttr(default=None)
    _total_count: Optional[int] = PrivateAttr(default=None)

    def __init__(self, gateway, **kwargs):
        super().__init__(gateway.get_table(), gateway=gateway, db=gateway.db, **kwargs)

    def paginate(self, page: int, page_size: int = 10) -> "Selection":
        self.current_page = int(page)
        self.page_size = int(page_size)
        self._reset()
        return self

    def order_by(self, order: Any, direction: Optional[str] = None) -> "Selection":
        self.set_order(order, direction)
        self._reset()
        return self

    def count_with_query(self) -> "Selection":
        """Count rows with a ``count(*)`` query even where the engine can count found rows."""
        self.found_rows = False
        self._reset()
        return self

    def _reset(self) -> None:
        self._result = None
        self._total_count = None

    def _uses_found_rows(self) -> bool:
        return self.found_rows and self.db.supports_sql_calc_found_rows()

    def _execute(self) -> Resultset:
        if self._result is None:
            if self.current_page:
                self.set_limit(self.page_size)
                self.set_offset(max(self.current_page - 1, 0) * self.page_size)
                self.set_sql_calc_found_rows(self._uses_found_rows())
            self._result = Resultset(self.db.query(self), self.gateway)
            if self.current_page:
                if self._uses_found_rows():
                    self._total_count = int(self.db.fetch_value(self.db.dialect.sql_found_rows()))
                else:
                    self._total_count = self._count_with_query()
        return self._result

    def _count_with_query(self) -> int:
        limit, offset, calc_found_rows = self.limit, self.offset, self.sql_calc_found_rows
        self.limit = self.offset = None
        self.sql_calc_found_rows = False
        try:
            query = Query(self)
            query.add_column(Literal("count(*)"), "total_count")
            return int(self.db.fetch_value(query))
        finally:
            self.limit, self.offset, self.sql_calc_found_rows = limit, offset, calc_found_rows

    def total_count(self) -> int:
        """Number of rows matched, ignoring pagination."""
        if self._total_count is None:
            if self.current_page:
                self._execute()
            else:
                self._total_count = self._count_with_query()
        return self._total_count

    def total_pages(self) -> Optional[int]:
        """Number of pages, or None when the selection is not paginated."""
        if not self.page_size:
            return None
        return math.ceil(self.total_count() / self.page_size)

    def __iter__(self):
        return iter(self._execute())

    def all(self) -> list[Any]:
        return list(self)

    def one(self) -> Any:
        """The only matching record, or None.

        Raises:
            MoreThanOneRowReturned: Several rows match.
        """
        rows = iter(self)
        first = next(rows, None)
        if first is not None and next(rows, None) is not None:
            raise MoreThanOneRowReturned(f"More than one row returned from `{self.table}`")
        return first

    def __getattr__(self, name: str) -> Any:
        try:
            return super().__getattr__(name)
        except AttributeError:
            if name.startswith("_"):
                raise
        gateway = self.__dict__.get("gateway")
        scope = gateway.scopes.resolve(name) if gateway is not None else None
        if scope is None:
            raise BadMethodCall(f"No scope `{name}` on table `{self.table}`")

        def apply(*args):
            scope(self, *args)
            return self

        return apply
