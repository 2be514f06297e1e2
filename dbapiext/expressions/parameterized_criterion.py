"""Raw SQL condition with positional ``?`` placeholders."""

import re
from typing import Any

from ..errors import TooFewParameters, TooManyParameters
from ._bases import Expression, resolve_context
from .value import Value


class ParameterizedCriterion(Expression):
    """SQL template whose ``?`` marks are replaced, left to right, by escaped parameters.

    Parameters are rendered inline as literals (plain values through Value,
    expressions as themselves), so ``"id IN (?)"`` with ``[1, 2]`` gives
    ``id IN (1, 2)``. The number of ``?`` marks must equal the number of
    parameters.
    """

    sql: str
    parameters: tuple[Expression, ...] = ()

    def __init__(self, sql: str, parameters: Any = (), **kwargs):
        super().__init__(
            sql=sql,
            parameters=tuple(
                parameter if isinstance(parameter, Expression) else Value(parameter)
                for parameter in parameters
            ),
            **kwargs,
        )

    def to_sql(self, db: Any = None) -> str:
        db = resolve_context(db)
        remaining = iter(self.parameters)

        def replace(match: re.Match) -> str:
            try:
                parameter = next(remaining)
            except StopIteration:
                raise TooFewParameters(f"Too few parameters for `{self.sql}`") from None
            return parameter.to_sql(db)

        sql = re.sub(r"\?", replace, self.sql)
        if next(remaining, None) is not None:
            raise TooManyParameters(f"Too many parameters for `{self.sql}`")
        return sql
