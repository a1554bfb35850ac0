"""
Exception types and error messages shared across txscope.
"""


class ErrorMessage:
    """Messages carried by IllegalStateError."""

    CANNOT_START_A_NEW_TRANSACTION = "Cannot start a new transaction."
    TRANSACTION_IS_NOT_ACTIVE = "Transaction is not active."
    IMPLICIT_DB_INSTANCE_REQUIRED = "Implicit DB instance required but not found."
    TX_ALIAS_OF_CURRENT_TX = (
        "DB.tx is an alias of DB.current_tx. "
        "You cannot call this API before beginning a transaction."
    )


class TxScopeError(Exception):
    """Base exception for txscope errors."""

    pass


class IllegalStateError(TxScopeError):
    """Raised when the transaction state machine is misused."""

    pass


class ConfigurationError(TxScopeError):
    """Raised when configuration values are missing or invalid."""

    pass
