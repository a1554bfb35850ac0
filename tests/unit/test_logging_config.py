"""
Unit tests for logging level resolution.
"""

import logging

import pytest

from txscope.core.config import Config
from txscope.utils.logging_config import configure_logging, resolve_log_level


@pytest.mark.parametrize(
    "name, expected",
    [("DEBUG", logging.DEBUG), ("warning", logging.WARNING), (" error ", logging.ERROR)],
)
def test_known_level_names(name, expected):
    assert resolve_log_level(name) == expected


def test_unknown_level_falls_back_to_default():
    assert resolve_log_level("VERBOSE") == logging.INFO
    assert resolve_log_level("VERBOSE", default=logging.ERROR) == logging.ERROR


def test_configure_logging_tolerates_unknown_level(monkeypatch):
    txscope_logger = logging.getLogger("txscope")
    original_level = txscope_logger.level
    monkeypatch.setattr(Config, "LOG_LEVEL", "VERBOSE")

    try:
        configure_logging()
        assert txscope_logger.level == logging.INFO
    finally:
        txscope_logger.setLevel(original_level)
