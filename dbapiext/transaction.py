"""Transaction context manager."""

import logging
from contextlib import contextmanager

from .connection import Connection, get_connection

logger = logging.getLogger("dbapiext")


@contextmanager
def transaction(connection: Connection | str = "default"):
    """Run the block in a transaction on ``connection`` (or the connection registered under that name).

    Commits when the block succeeds and rolls back when it raises; the error
    is re-raised. Inside an open transaction this needs nested transactions
    enabled, and then works on a savepoint.
    """
    db = get_connection(connection) if isinstance(connection, str) else connection
    db.begin_transaction()
    try:
        yield db
        db.commit()
    except BaseException:
        logger.debug("Rolling back transaction at depth %d", db.transaction_depth)
        db.rollback()
        raise
