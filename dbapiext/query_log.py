"""Statement logging hooks for Connection."""

import logging
import time
import warnings
from typing import Any, Optional

from pydantic import BaseModel

from .utils.find_caller import find_caller


class QueryLogEntry(BaseModel):
    """A statement being executed, as captured by QueryLogger.before()."""

    sql: str
    parameters: Any = None
    caller: Optional[str] = None
    started: float


class QueryLogger:
    """Log every statement with its parameters, duration and call site.

    Args:
        logger: Destination logger (defaults to ``dbapiext.queries``).
        slow_log_offset: When set, statements faster than this many seconds
            are not logged. Failed statements are always logged.
        level: Level successful statements are logged at.
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        slow_log_offset: Optional[float] = None,
        level: int = logging.DEBUG,
    ):
        self.logger = logger or logging.getLogger("dbapiext.queries")
        self.slow_log_offset = slow_log_offset
        self.level = level

    def before(self, sql: str, parameters: Any = None) -> QueryLogEntry:
        return QueryLogEntry(
            sql=sql,
            parameters=parameters,
            caller=find_caller(),
            started=time.perf_counter(),
        )

    def after(self, entry: QueryLogEntry, error: Optional[BaseException] = None) -> None:
        duration = time.perf_counter() - entry.started
        if error is None and self.slow_log_offset is not None and duration < self.slow_log_offset:
            return
        level = logging.ERROR if error is not None else self.level
        try:
            self.logger.log(
                level,
                "[%s] (%.4fs) %s%s%s",
                entry.caller or "?",
                duration,
                entry.sql,
                f"\nparameters: {entry.parameters!r}" if entry.parameters else "",
                f"\nfailed: {error}" if error is not None else "",
            )
        except Exception as exception:  # pylint: disable=broad-exception-caught
            # reported, never raised
            warnings.warn(f"Could not log query: {exception}", RuntimeWarning)
