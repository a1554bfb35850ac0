"""
Transaction state machine over a single connection handle.

Whether a transaction is active is never cached: it is read back from the
handle's auto-commit flag on every check, so any number of Tx objects
wrapping the same handle agree on its status.
"""

from __future__ import annotations

from enum import Enum

from txscope.core.errors import ErrorMessage, IllegalStateError
from txscope.transactions.connection import ConnectionHandle
from txscope.utils.logging_config import get_logger


logger = get_logger(__name__)


class TxState(str, Enum):
    """Lifecycle of a single Tx instance."""

    NOT_BEGUN = "NOT_BEGUN"
    ACTIVE = "ACTIVE"
    COMMITTED = "COMMITTED"
    ROLLED_BACK = "ROLLED_BACK"


_TERMINAL_STATES = (TxState.COMMITTED, TxState.ROLLED_BACK)


class Tx:
    """A transaction bound to one connection handle."""

    def __init__(self, conn: ConnectionHandle) -> None:
        self._conn = conn
        # A Tx built over an already open transaction is a view of it.
        self._state = TxState.ACTIVE if self.is_active() else TxState.NOT_BEGUN

    @property
    def connection(self) -> ConnectionHandle:
        return self._conn

    @property
    def state(self) -> TxState:
        return self._state

    def _is_usable(self) -> bool:
        return not self._conn.closed and not self._conn.read_only

    def is_active(self) -> bool:
        """True while an explicit transaction is open on the handle."""
        return self._is_usable() and not self._conn.auto_commit

    def begin(self) -> None:
        """
        Leave auto-commit mode and open a transaction.

        Raises:
            IllegalStateError: If this Tx already finished, the handle is
                closed or read-only, or a transaction is already open.
        """
        if (
            self._state in _TERMINAL_STATES
            or not self._is_usable()
            or not self._conn.auto_commit
        ):
            raise IllegalStateError(ErrorMessage.CANNOT_START_A_NEW_TRANSACTION)

        self._conn.auto_commit = False
        self._state = TxState.ACTIVE
        logger.debug("transaction_begin")

    def _ensure_active(self) -> None:
        if self._state in _TERMINAL_STATES or not self.is_active():
            raise IllegalStateError(ErrorMessage.TRANSACTION_IS_NOT_ACTIVE)

    def commit(self) -> None:
        """Commit and return the handle to auto-commit mode."""
        self._ensure_active()
        self._conn.commit()
        self._conn.auto_commit = True
        self._state = TxState.COMMITTED
        logger.debug("transaction_committed")

    def rollback(self) -> None:
        """Roll back and return the handle to auto-commit mode."""
        self._ensure_active()
        self._conn.rollback()
        self._conn.auto_commit = True
        self._state = TxState.ROLLED_BACK
        logger.debug("transaction_rolled_back")

    def rollback_if_active(self) -> None:
        """
        Roll back when a transaction is open, otherwise do nothing.

        Only the "not active" precondition is ignored; driver errors raised
        by the rollback itself propagate.
        """
        try:
            self.rollback()
        except IllegalStateError:
            logger.debug("transaction_rollback_skipped", state=self._state.value)

    def __repr__(self) -> str:
        return f"Tx(state={self._state.value})"
