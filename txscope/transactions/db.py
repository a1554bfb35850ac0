"""
DB accessor: execution modes over one connection handle.

Three ways to run a unit of work (a callable taking a DBSession):

- ``auto_commit``: no transaction management, every statement commits itself.
- ``within_tx``: join the transaction already open on the handle; the caller
  that opened it is responsible for finishing it.
- ``local_tx``: begin, run, commit; any failure rolls back and is re-raised
  unchanged.

The accessor keeps no transaction state of its own. Every check reads the
handle's flags.
"""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

from txscope.core.errors import ErrorMessage, IllegalStateError
from txscope.transactions.connection import ConnectionHandle
from txscope.transactions.session import DBSession
from txscope.transactions.tx import Tx
from txscope.utils.database_utils import transactional
from txscope.utils.logging_config import get_logger


logger = get_logger(__name__)

A = TypeVar("A")


def _is_unusable(conn: Optional[ConnectionHandle]) -> bool:
    return conn is None or conn.closed or conn.read_only


class DB:
    """Accessor owning one connection handle for its lifetime."""

    def __init__(self, conn: ConnectionHandle) -> None:
        self._conn = conn

    @property
    def connection(self) -> ConnectionHandle:
        return self._conn

    # ------------------------------------------------------------------ #
    # State probes
    # ------------------------------------------------------------------ #

    def is_tx_not_active(self) -> bool:
        """True when the handle is missing, closed or read-only."""
        return _is_unusable(self._conn)

    def is_tx_not_yet_started(self) -> bool:
        return self._conn is not None and self._conn.auto_commit

    def is_tx_already_started(self) -> bool:
        return self._conn is not None and not self._conn.auto_commit

    # ------------------------------------------------------------------ #
    # Transactions
    # ------------------------------------------------------------------ #

    def new_tx(self, conn: Optional[ConnectionHandle] = None) -> Tx:
        """
        Create a Tx that has not begun yet.

        Args:
            conn: Handle to wrap. Defaults to the accessor's own handle.

        Raises:
            IllegalStateError: If the handle is unusable or already inside a
                transaction.
        """
        conn = self._conn if conn is None else conn
        if _is_unusable(conn) or not conn.auto_commit:
            raise IllegalStateError(ErrorMessage.CANNOT_START_A_NEW_TRANSACTION)
        return Tx(conn)

    def current_tx(self) -> Tx:
        """
        Return a Tx view of the transaction open on the handle.

        Raises:
            IllegalStateError: If the handle is unusable or no transaction
                has been started.
        """
        if self.is_tx_not_active() or self.is_tx_not_yet_started():
            raise IllegalStateError(ErrorMessage.TRANSACTION_IS_NOT_ACTIVE)
        return Tx(self._conn)

    def tx(self) -> Tx:
        """Alias of current_tx() with a message aimed at callers of begin/commit."""
        try:
            return self.current_tx()
        except IllegalStateError as e:
            raise IllegalStateError(ErrorMessage.TX_ALIAS_OF_CURRENT_TX) from e

    def begin(self) -> None:
        self.new_tx().begin()

    def begin_if_not_yet(self) -> None:
        """Begin a transaction unless one is already open."""
        try:
            self.begin()
        except IllegalStateError:
            logger.debug("begin_skipped")

    def commit(self) -> None:
        self.tx().commit()

    def rollback(self) -> None:
        self.tx().rollback()

    def rollback_if_active(self) -> None:
        """Roll back the open transaction, if any. Driver errors still propagate."""
        try:
            self.tx().rollback_if_active()
        except IllegalStateError:
            logger.debug("rollback_skipped")

    # ------------------------------------------------------------------ #
    # Sessions
    # ------------------------------------------------------------------ #

    def auto_commit_session(self) -> DBSession:
        return DBSession(self._conn)

    def within_tx_session(self, tx: Optional[Tx] = None) -> DBSession:
        tx = self.current_tx() if tx is None else tx
        if not tx.is_active():
            raise IllegalStateError(ErrorMessage.TRANSACTION_IS_NOT_ACTIVE)
        return DBSession(self._conn, tx)

    def read_only_session(self) -> DBSession:
        """Flag the handle read-only and return a session over it."""
        self._conn.read_only = True
        return DBSession(self._conn, read_only=True)

    # ------------------------------------------------------------------ #
    # Execution modes
    # ------------------------------------------------------------------ #

    def auto_commit(self, execution: Callable[[DBSession], A]) -> A:
        return execution(self.auto_commit_session())

    def within_tx(self, execution: Callable[[DBSession], A]) -> A:
        """Run execution inside the transaction already open on the handle."""
        return execution(self.within_tx_session(self.current_tx()))

    def read_only(self, execution: Callable[[DBSession], A]) -> A:
        """Run execution read-only, restoring the handle's previous flag afterwards."""
        previous = self._conn.read_only
        session = self.read_only_session()
        try:
            return execution(session)
        finally:
            self._conn.read_only = previous

    def local_tx(self, execution: Callable[[DBSession], A]) -> A:
        """
        Run execution in a transaction of its own.

        The transaction commits when execution returns. Any failure, whatever
        its type, rolls it back and is re-raised as is. If the rollback
        itself fails, that error propagates with the original failure as its
        ``__context__``.

        Raises:
            IllegalStateError: If a transaction is already open or the handle
                is unusable. Nothing has run at that point.
        """
        with transactional(self) as session:
            return execution(session)


def _ensure_db_instance(db: Optional[DB]) -> DB:
    if db is None:
        raise IllegalStateError(ErrorMessage.IMPLICIT_DB_INSTANCE_REQUIRED)
    return db


def auto_commit(execution: Callable[[DBSession], A], db: Optional[DB] = None) -> A:
    return _ensure_db_instance(db).auto_commit(execution)


def within_tx(execution: Callable[[DBSession], A], db: Optional[DB] = None) -> A:
    return _ensure_db_instance(db).within_tx(execution)


def local_tx(execution: Callable[[DBSession], A], db: Optional[DB] = None) -> A:
    return _ensure_db_instance(db).local_tx(execution)


def read_only(execution: Callable[[DBSession], A], db: Optional[DB] = None) -> A:
    return _ensure_db_instance(db).read_only(execution)
