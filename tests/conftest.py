"""
Shared pytest fixtures for txscope tests.
"""

import pytest

from txscope.core.config import Config
from txscope.core.database import close_connection, open_db
from txscope.transactions.connection import ConnectionHandle


class FakeConnectionHandle(ConnectionHandle):
    """In-memory handle that records every interaction."""

    def __init__(self, auto_commit=True, closed=False, read_only=False):
        self._auto_commit = auto_commit
        self._closed = closed
        self._read_only = read_only
        self.auto_commit_history = []
        self.commit_count = 0
        self.rollback_count = 0
        self.statements = []
        self.commit_error = None
        self.rollback_error = None

    @property
    def auto_commit(self):
        return self._auto_commit

    @auto_commit.setter
    def auto_commit(self, value):
        self.auto_commit_history.append(value)
        self._auto_commit = value

    @property
    def closed(self):
        return self._closed

    @closed.setter
    def closed(self, value):
        self._closed = value

    @property
    def read_only(self):
        return self._read_only

    @read_only.setter
    def read_only(self, value):
        self._read_only = value

    def commit(self):
        if self.commit_error is not None:
            raise self.commit_error
        self.commit_count += 1

    def rollback(self):
        if self.rollback_error is not None:
            raise self.rollback_error
        self.rollback_count += 1

    def execute(self, sql, params=()):
        self.statements.append((sql, tuple(params)))
        return None


@pytest.fixture
def fake_conn():
    """Open, writable handle in auto-commit mode."""
    return FakeConnectionHandle()


@pytest.fixture
def make_conn():
    """Factory for handles in arbitrary states."""
    return FakeConnectionHandle


@pytest.fixture
def sqlite_db(tmp_path):
    """DB accessor over a real SQLite file with a single ``items`` table."""
    original_db_path = Config.DB_PATH
    Config.DB_PATH = str(tmp_path / "data" / "txscope_test.db")

    db = open_db()
    db.connection.execute(
        "CREATE TABLE items (id INTEGER PRIMARY KEY, name TEXT NOT NULL UNIQUE)"
    )
    yield db

    close_connection(db)
    Config.DB_PATH = original_db_path
