"""dbapiext: a SQL abstraction layer over DB-API 2.0 drivers.

Composable query builder, connection wrapper with nested transactions,
schema reflection, and table gateways returning active records.
"""

from .connection import Connection, connect, get_connection
from .dialects import Dialect, get_dialect_for_scheme
from .errors import (
    AlreadyInTransaction,
    AmbiguousResultset,
    BadMethodCall,
    CannotRewindResultset,
    CouldNotDeterminePrimaryKey,
    DbapiextError,
    IllegalCondition,
    MetaNotSupported,
    MoreThanOneRowReturned,
    NoConditionsGiven,
    NoTransactionStarted,
    TooFewParameters,
    TooManyParameters,
    UnableToMarshal,
)
from .expressions import (
    Criteria,
    Criterion,
    Expression,
    Field,
    Join,
    Literal,
    ParameterizedCriterion,
    Value,
)
from .information_schema import ColumnInfo, ForeignKey, InformationSchema
from .query import Query
from .query_log import QueryLogger
from .table import Record, Resultset, Selection, TableGateway
from .transaction import transaction

__all__ = [
    "AlreadyInTransaction",
    "AmbiguousResultset",
    "BadMethodCall",
    "CannotRewindResultset",
    "ColumnInfo",
    "Connection",
    "CouldNotDeterminePrimaryKey",
    "Criteria",
    "Criterion",
    "DbapiextError",
    "Dialect",
    "Expression",
    "Field",
    "ForeignKey",
    "IllegalCondition",
    "InformationSchema",
    "Join",
    "Literal",
    "MetaNotSupported",
    "MoreThanOneRowReturned",
    "NoConditionsGiven",
    "NoTransactionStarted",
    "ParameterizedCriterion",
    "Query",
    "QueryLogger",
    "Record",
    "Resultset",
    "Selection",
    "TableGateway",
    "TooFewParameters",
    "TooManyParameters",
    "UnableToMarshal",
    "Value",
    "connect",
    "get_connection",
    "get_dialect_for_scheme",
    "transaction",
]
