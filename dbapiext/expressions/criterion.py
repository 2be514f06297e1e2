"""Binary comparison between two expressions."""

from typing import Any

from ..utils.indent import indent
from ._bases import Expression, resolve_context
from .field import Field
from .value import Value


class Criterion(Expression):
    """``left <comparator> right``.

    Plain inputs are wrapped: ``left`` becomes a Field and ``right`` a Value,
    so caller data always ends up escaped. Wrap explicitly (Field, Literal) to
    compare two columns or to embed raw SQL.

    With ``=`` and ``!=``, a NULL right side renders ``IS [NOT] NULL`` and a
    many right side renders ``[NOT] IN (...)``. Other comparators render
    verbatim whatever the right side is.
    """

    left: Expression
    right: Expression
    comparator: str = "="

    def __init__(self, left: Any, right: Any = None, comparator: str = "=", **kwargs):
        super().__init__(
            left=left if isinstance(left, Expression) else Field(left),
            right=right if isinstance(right, Expression) else Value(right),
            comparator=comparator.strip(),
            **kwargs,
        )

    def to_sql(self, db: Any = None) -> str:
        db = resolve_context(db)
        left = self.left.to_sql(db)
        if self.comparator in ("=", "!="):
            if self.right.is_null():
                return left + (" IS NULL" if self.comparator == "=" else " IS NOT NULL")
            if self.right.is_many():
                right = indent(self.right.to_sql(db), True)
                return left + (" IN (" if self.comparator == "=" else " NOT IN (") + right + ")"
        return f"{left} {self.comparator} {self.right.to_sql(db)}"
