"""Locate the first stack frame outside dbapiext."""

import inspect
import os
from typing import Optional

_PACKAGE_DIRECTORY = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_SKIPPED_MODULES = ("contextlib",)


def find_caller() -> Optional[str]:
    """Return ``"path:line"`` for the innermost frame not belonging to dbapiext.

    Frames from ``contextlib`` are skipped too, so that ``with db.transaction():``
    reports the line of the ``with`` statement.
    """
    frame = inspect.currentframe()
    try:
        while frame is not None:
            filename = os.path.abspath(frame.f_code.co_filename)
            module = frame.f_globals.get("__name__", "")
            if not filename.startswith(_PACKAGE_DIRECTORY + os.sep) and module not in _SKIPPED_MODULES:
                return f"{filename}:{frame.f_lineno}"
            frame = frame.f_back
        return None
    finally:
        del frame
