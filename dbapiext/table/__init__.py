"""Table gateway, selections, resultsets and records."""

from .gateway import TableGateway
from .record import Record
from .resultset import Resultset
from .scopes import ScopeRegistry
from .selection import Selection

__all__ = [
    "Record",
    "Resultset",
    "ScopeRegistry",
    "Selection",
    "TableGateway",
]
