"""
Database connection bootstrap for txscope.

This module handles:
- Creating the data directory if it doesn't exist
- Opening SQLite connections configured from Config
- Wrapping a connection in a DB accessor
"""

import sqlite3
from pathlib import Path
from typing import Optional

from txscope.core.config import Config
from txscope.transactions.connection import SQLiteConnectionHandle
from txscope.transactions.db import DB
from txscope.utils.logging_config import get_logger


logger = get_logger(__name__)

MEMORY_DB_PATH = ":memory:"


def ensure_data_directory(db_path: str) -> None:
    """Create the parent directory of db_path if it doesn't exist."""
    if db_path == MEMORY_DB_PATH:
        return

    data_dir = Path(db_path).parent
    if not data_dir.exists():
        data_dir.mkdir(parents=True, exist_ok=True)
        logger.info("data_directory_created", path=str(data_dir))


def get_db_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """
    Get a database connection with proper configuration.

    Args:
        db_path: Path to the SQLite database file. If None, uses Config.DB_PATH.

    Returns:
        SQLite connection with the configured journal mode and foreign keys.
    """
    if db_path is None:
        db_path = Config.DB_PATH

    ensure_data_directory(db_path)

    conn = sqlite3.connect(db_path, timeout=Config.DB_TIMEOUT)
    conn.row_factory = sqlite3.Row

    conn.execute(f"PRAGMA foreign_keys = {'ON' if Config.DB_FOREIGN_KEYS else 'OFF'}")
    if db_path != MEMORY_DB_PATH:
        conn.execute(f"PRAGMA journal_mode = {Config.DB_JOURNAL_MODE}")

    logger.debug("connection_opened", path=db_path)
    return conn


def open_db(db_path: Optional[str] = None) -> DB:
    """
    Open a configured connection and wrap it in a DB accessor.

    The caller owns the connection and closes it with close_connection().
    """
    Config.validate()
    return DB(SQLiteConnectionHandle(get_db_connection(db_path)))


def close_connection(db: Optional[DB]) -> None:
    """
    Close the connection behind a DB accessor.

    Args:
        db: Accessor whose handle should be closed.
    """
    if db is None:
        return
    handle = db.connection
    if isinstance(handle, SQLiteConnectionHandle) and not handle.closed:
        handle.close()
        logger.debug("connection_closed")
