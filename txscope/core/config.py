"""
Configuration management for txscope.

This module handles loading and validating environment variables.
"""

import os

from dotenv import load_dotenv

from txscope.core.errors import ConfigurationError

# Load environment variables from .env file
load_dotenv()

VALID_JOURNAL_MODES = ("DELETE", "TRUNCATE", "PERSIST", "MEMORY", "WAL", "OFF")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _float_env(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _bool_env(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "y")


class Config:
    """Configuration class with environment variables."""

    # Database
    DB_PATH: str = os.getenv("DB_PATH", "data/txscope.db")
    DB_TIMEOUT: float = _float_env("DB_TIMEOUT", 5.0)
    DB_JOURNAL_MODE: str = os.getenv("DB_JOURNAL_MODE", "WAL").strip().upper()
    DB_FOREIGN_KEYS: bool = _bool_env("DB_FOREIGN_KEYS", True)

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls) -> None:
        """
        Validate the database and logging settings.

        Raises:
            ConfigurationError: If a setting is missing or invalid.
        """
        if not cls.DB_PATH:
            raise ConfigurationError("DB_PATH must be configured")

        if cls.DB_TIMEOUT < 0:
            raise ConfigurationError(f"DB_TIMEOUT must not be negative: {cls.DB_TIMEOUT}")

        if cls.DB_JOURNAL_MODE not in VALID_JOURNAL_MODES:
            raise ConfigurationError(
                f"Invalid DB_JOURNAL_MODE: {cls.DB_JOURNAL_MODE} "
                f"(expected one of {', '.join(VALID_JOURNAL_MODES)})"
            )

        if str(cls.LOG_LEVEL).strip().upper() not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid LOG_LEVEL: {cls.LOG_LEVEL} "
                f"(expected one of {', '.join(VALID_LOG_LEVELS)})"
            )
