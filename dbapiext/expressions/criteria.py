"""Criterion nodes joined by one conjunction."""

from typing import Any

from pydantic import ConfigDict, Field as PydanticField

from ._bases import Expression, resolve_context
from .criterion import Criterion
from .field import Field
from .parameterized_criterion import ParameterizedCriterion


class Criteria(Expression):
    """Ordered list of criteria nodes joined by ``AND`` or ``OR``.

    Children may be criteria themselves, which gives a tree of conditions;
    children that stand for several conditions are parenthesized. An empty
    Criteria renders as ``""``.
    """

    model_config = ConfigDict(frozen=False)

    conjunction: str = "OR"
    criteria: list[Expression] = PydanticField(default_factory=list)

    def __init__(self, conjunction: str = "OR", **kwargs):
        super().__init__(conjunction=conjunction, **kwargs)

    def add_criterion(self, left: Any, right: Any = None, comparator: str = "=") -> Expression:
        """Add ``left <comparator> right`` (or ``left`` itself if it is a criteria node) and return it."""
        if isinstance(left, (Criterion, Criteria, ParameterizedCriterion)):
            return self.add_criterion_object(left)
        return self.add_criterion_object(Criterion(left, right, comparator))

    def add_constraint(self, left: str, right: str, comparator: str = "=") -> Expression:
        """Add a column-to-column comparison (e.g. a join condition)."""
        return self.add_criterion_object(Criterion(Field(left), Field(right), comparator))

    def add_criterion_object(self, criterion: Expression) -> Expression:
        self.criteria.append(criterion)
        return criterion

    def remove_criterion(self, left: Any, right: Any = None, comparator: str = "=") -> None:
        """Remove criteria rendering the same SQL as ``left <comparator> right``."""
        if isinstance(left, Expression):
            self.remove_criterion_object(left)
        else:
            self.remove_criterion_object(Criterion(left, right, comparator))

    def remove_criterion_object(self, criterion: Expression) -> None:
        sql = criterion.to_sql()
        self.criteria = [existing for existing in self.criteria if existing.to_sql() != sql]

    def where(self, left: Any, *arguments: Any) -> "Criteria":
        """Add a condition and return self, for chaining.

        A string containing ``?`` is a parameterized condition whose remaining
        arguments are bound by position: ``where("age > ? AND age < ?", 18, 65)``.
        Anything else is passed to add_criterion: ``where("name", "Anna")``,
        ``where("age", 18, ">")``.
        """
        if isinstance(left, str) and "?" in left:
            self.add_criterion_object(ParameterizedCriterion(left, arguments))
        else:
            self.add_criterion(left, *arguments)
        return self

    def set_conjunction_and(self) -> None:
        self.conjunction = "AND"

    def set_conjunction_or(self) -> None:
        self.conjunction = "OR"

    def to_sql(self, db: Any = None) -> str:
        db = resolve_context(db)
        parts = []
        for criterion in self.criteria:
            sql = criterion.to_sql(db)
            if not sql:
                continue
            parts.append(f"({sql})" if criterion.is_many() else sql)
        return f"\n{self.conjunction} ".join(parts)

    def is_many(self) -> bool:
        return len(self.criteria) > 1
