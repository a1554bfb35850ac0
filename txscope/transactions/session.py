"""
Execution context handed to units of work.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from txscope.core.errors import ErrorMessage, IllegalStateError
from txscope.transactions.connection import ConnectionHandle
from txscope.transactions.tx import Tx


class DBSession:
    """Connection handle plus the active transaction, if there is one."""

    def __init__(
        self,
        conn: ConnectionHandle,
        tx: Optional[Tx] = None,
        *,
        read_only: bool = False,
    ) -> None:
        if tx is not None and not tx.is_active():
            raise IllegalStateError(ErrorMessage.TRANSACTION_IS_NOT_ACTIVE)
        self._conn = conn
        self._tx = tx
        self._read_only = read_only

    @property
    def connection(self) -> ConnectionHandle:
        return self._conn

    @property
    def tx(self) -> Optional[Tx]:
        return self._tx

    @property
    def is_transactional(self) -> bool:
        return self._tx is not None

    @property
    def read_only(self) -> bool:
        return self._read_only

    def execute(self, sql: str, params: Iterable[Any] = ()) -> Any:
        """Run a statement on the bound connection."""
        return self._conn.execute(sql, params)

    def __repr__(self) -> str:
        return f"DBSession(tx={self._tx!r}, read_only={self._read_only})"
