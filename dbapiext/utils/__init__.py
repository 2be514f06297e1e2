"""Small helpers shared across dbapiext."""

from .binder import Binder
from .find_caller import find_caller
from .indent import indent
from .rows import column_names, fetch_all_assoc, fetch_assoc
from .underscore import underscore

__all__ = [
    "Binder",
    "column_names",
    "fetch_all_assoc",
    "fetch_assoc",
    "find_caller",
    "indent",
    "underscore",
]
