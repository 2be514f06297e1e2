"""Exceptions raised by dbapiext.

Driver errors are never wrapped; everything raised by dbapiext itself derives
from ``DbapiextError``. Some classes also derive from the matching builtin so
that generic handlers (``except ValueError``) keep working.
"""

from typing import Optional


class DbapiextError(Exception):
    """Base class for all dbapiext errors."""
    pass


class NoTransactionStarted(DbapiextError):
    """Commit, rollback or assert_transaction() called outside a transaction."""
    pass


class AlreadyInTransaction(DbapiextError):
    """begin_transaction() called while a transaction is open and nesting is disabled."""

    def __init__(self, message: str, origin: Optional[str] = None):
        super().__init__(message)
        self.origin = origin
        """Call site (``file:line``) of the outermost begin_transaction()."""


class MetaNotSupported(DbapiextError):
    """Schema introspection is not available for this driver."""
    pass


class CouldNotDeterminePrimaryKey(DbapiextError):
    """The table has no primary key and no ``id`` column."""
    pass


class IllegalCondition(DbapiextError, ValueError):
    """A fetch/update/delete condition is malformed."""
    pass


class NoConditionsGiven(IllegalCondition):
    """A fetch/update/delete condition is empty."""
    pass


class TooFewParameters(DbapiextError, ValueError):
    """A parameterized criterion has more ``?`` placeholders than parameters."""
    pass


class TooManyParameters(DbapiextError, ValueError):
    """A parameterized criterion has more parameters than ``?`` placeholders."""
    pass


class AmbiguousResultset(DbapiextError):
    """A result row has two columns with the same name."""
    pass


class MoreThanOneRowReturned(DbapiextError):
    """Selection.one() matched several rows."""
    pass


class BadMethodCall(DbapiextError, AttributeError):
    """Unknown scope, relation or column."""
    pass


class UnableToMarshal(DbapiextError, TypeError):
    """An entity cannot be converted to a column/value mapping."""
    pass


class CannotRewindResultset(DbapiextError):
    """A forward-only resultset was rewound after rows were consumed."""
    pass
