"""
Structured logging for txscope.

Transaction lifecycle events (begin, commit, rollback, skipped cleanups) are
emitted as structlog event names through the stdlib ``txscope`` logger, so
the host application decides where they end up.
"""

import logging

import structlog
from structlog.stdlib import LoggerFactory

from txscope.core.config import Config


def resolve_log_level(name: str, default: int = logging.INFO) -> int:
    """Map a level name such as ``"debug"`` to its number, or return default."""
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else default


def configure_logging() -> None:
    """
    Route txscope events through structlog as JSON lines.

    The ``txscope`` logger gets the level named by Config.LOG_LEVEL; an
    unknown name falls back to INFO so importing the package never fails.
    Config.validate() reports the bad value.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.getLogger("txscope").setLevel(resolve_log_level(Config.LOG_LEVEL))


def get_logger(name: str = None) -> structlog.stdlib.BoundLogger:
    """Logger for a txscope module, usually called with ``__name__``."""
    return structlog.get_logger(name)


# Leave a host application's own structlog setup alone
if not structlog.is_configured():
    configure_logging()
