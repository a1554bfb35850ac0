"""
Connection handles observed by the transaction layer.

A connection handle exposes the flags the transaction state machine reads
(auto-commit, closed, read-only) and the commit/rollback primitives it
drives. Handles are never opened or closed by Tx, DBSession or DB; they are
borrowed from whoever created them.
"""

from __future__ import annotations

import sqlite3
from typing import Any, Iterable


class ConnectionHandle:
    """Contract for a live database connection used by the transaction layer."""

    @property
    def auto_commit(self) -> bool:
        raise NotImplementedError

    @auto_commit.setter
    def auto_commit(self, value: bool) -> None:
        raise NotImplementedError

    @property
    def closed(self) -> bool:
        raise NotImplementedError

    @property
    def read_only(self) -> bool:
        raise NotImplementedError

    @read_only.setter
    def read_only(self, value: bool) -> None:
        raise NotImplementedError

    def commit(self) -> None:
        raise NotImplementedError

    def rollback(self) -> None:
        raise NotImplementedError

    def execute(self, sql: str, params: Iterable[Any] = ()) -> Any:
        raise NotImplementedError


class SQLiteConnectionHandle(ConnectionHandle):
    """
    ConnectionHandle backed by a ``sqlite3.Connection``.

    The wrapped connection is switched to ``isolation_level=None`` so the
    driver never opens transactions on its own. Leaving auto-commit mode
    issues ``BEGIN``; returning to it commits whatever is still open, the
    same way ``setAutoCommit(true)`` behaves on a JDBC connection.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        conn.isolation_level = None
        self._conn = conn

    @property
    def raw(self) -> sqlite3.Connection:
        """The wrapped sqlite3 connection."""
        return self._conn

    @property
    def auto_commit(self) -> bool:
        return not self._conn.in_transaction

    @auto_commit.setter
    def auto_commit(self, value: bool) -> None:
        if value:
            if self._conn.in_transaction:
                self._conn.commit()
        elif not self._conn.in_transaction:
            self._conn.execute("BEGIN")

    @property
    def closed(self) -> bool:
        try:
            self._conn.total_changes
        except sqlite3.ProgrammingError:
            return True
        return False

    @property
    def read_only(self) -> bool:
        row = self._conn.execute("PRAGMA query_only").fetchone()
        return bool(row[0])

    @read_only.setter
    def read_only(self, value: bool) -> None:
        self._conn.execute(f"PRAGMA query_only = {1 if value else 0}")

    def commit(self) -> None:
        self._conn.commit()

    def rollback(self) -> None:
        self._conn.rollback()

    def execute(self, sql: str, params: Iterable[Any] = ()) -> sqlite3.Cursor:
        return self._conn.execute(sql, tuple(params))

    def close(self) -> None:
        """Close the wrapped connection. Owned by the bootstrap layer, not by DB."""
        self._conn.close()
