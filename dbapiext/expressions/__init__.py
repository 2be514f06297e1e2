"""SQL expression nodes: fields, values, literals and criteria."""

from ._bases import Expression, resolve_context
from .field import Field
from .value import Value
from .literal import Literal
from .criterion import Criterion
from .parameterized_criterion import ParameterizedCriterion
from .criteria import Criteria
from .join import Join

__all__ = [
    "Criteria",
    "Criterion",
    "Expression",
    "Field",
    "Join",
    "Literal",
    "ParameterizedCriterion",
    "Value",
    "resolve_context",
]
