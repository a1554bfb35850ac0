"""
Unit tests for the transactional() context manager.
"""

import sqlite3

import pytest

from txscope.core.errors import IllegalStateError
from txscope.transactions.db import DB
from txscope.transactions.tx import TxState
from txscope.utils.database_utils import transactional


def test_commits_when_block_exits_normally(fake_conn):
    with transactional(DB(fake_conn)) as session:
        assert session.tx.is_active()
        session.execute("INSERT INTO items (name) VALUES ('a')")

    assert session.tx.state == TxState.COMMITTED
    assert fake_conn.commit_count == 1
    assert fake_conn.rollback_count == 0
    assert fake_conn.auto_commit is True


def test_rolls_back_and_reraises_unchanged(fake_conn):
    error = sqlite3.IntegrityError("UNIQUE constraint failed: items.name")

    with pytest.raises(sqlite3.IntegrityError) as exc_info:
        with transactional(DB(fake_conn)):
            raise error

    assert exc_info.value is error
    assert fake_conn.rollback_count == 1
    assert fake_conn.commit_count == 0
    assert fake_conn.auto_commit is True


def test_transaction_already_ended_by_driver_keeps_original_error(fake_conn):
    error = sqlite3.IntegrityError("UNIQUE constraint failed: items.name")

    with pytest.raises(sqlite3.IntegrityError) as exc_info:
        with transactional(DB(fake_conn)):
            # Driver aborted the transaction and left auto-commit mode
            fake_conn.auto_commit = True
            raise error

    assert exc_info.value is error
    assert fake_conn.rollback_count == 0
    assert fake_conn.commit_count == 0


def test_refuses_to_start_inside_open_transaction(make_conn):
    conn = make_conn(auto_commit=False)
    entered = False

    with pytest.raises(IllegalStateError):
        with transactional(DB(conn)):
            entered = True

    assert not entered
    assert conn.rollback_count == 0
