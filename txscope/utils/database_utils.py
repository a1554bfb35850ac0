"""
Database utility helpers.

Provides the context-manager form of a local transaction. ``DB.local_tx``
runs its unit of work inside ``transactional`` so both forms share one
begin/commit/rollback path.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

from txscope.core.errors import ErrorMessage, IllegalStateError
from txscope.transactions.session import DBSession
from txscope.utils.logging_config import get_logger

if TYPE_CHECKING:
    from txscope.transactions.db import DB


logger = get_logger(__name__)


@contextmanager
def transactional(db: "DB") -> Iterator[DBSession]:
    """
    Provide a transactional scope around a series of statements.

    Begins a new transaction on the accessor's handle and yields a session
    bound to it. The transaction commits when the block exits normally.
    Any exception escaping the block, whatever its type, triggers a rollback
    of whatever is still open and is then re-raised unchanged.

    Raises:
        IllegalStateError: If a transaction is already open or the handle is
            unusable. The block does not run in that case.
    """
    tx = db.new_tx()
    tx.begin()
    if not tx.is_active():
        raise IllegalStateError(ErrorMessage.TRANSACTION_IS_NOT_ACTIVE)
    session = DBSession(db.connection, tx)

    try:
        yield session
        tx.commit()
    except BaseException as exc:
        logger.warning(
            "transaction_rollback",
            error=str(exc),
            error_type=type(exc).__name__,
        )
        # The driver may already have ended the transaction (INSERT OR ROLLBACK,
        # RAISE(ROLLBACK) in a trigger), so only roll back what is still open.
        try:
            tx.rollback_if_active()
        except Exception as rollback_exc:
            logger.error(
                "transaction_rollback_failed",
                error=str(rollback_exc),
                original_error=str(exc),
            )
            raise
        raise
