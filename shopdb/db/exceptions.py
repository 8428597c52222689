"""Data-access exceptions.

Every failure raised by the pool and the DAO layer derives from
``DataAccessError`` and carries an ``ErrorKind`` so callers can branch on the
kind of failure instead of catching one broad exception type.
"""

import enum
from typing import Optional


class ErrorKind(enum.Enum):
    """Category of a data-access failure."""

    CONNECTION = 'connection'
    STATEMENT = 'statement'
    INSERT_INTEGRITY = 'insert_integrity'
    TRANSACTION = 'transaction'


class DataAccessError(Exception):
    """Base exception for data-access errors."""

    kind: ErrorKind = ErrorKind.STATEMENT

    def __init__(self, message: str, **context: object) -> None:
        """Initialize data-access error.

        Args:
            message: Human-readable error message
            **context: Additional context about the error
        """
        self.message = message
        self.context = context
        super().__init__(message)


class DatabaseConnectionError(DataAccessError):
    """The pool could not hand out a live connection."""

    kind = ErrorKind.CONNECTION


class PoolClosedError(DatabaseConnectionError):
    """The pool was used after shutdown."""

    def __init__(self) -> None:
        super().__init__("Connection pool is closed")


class PoolInitializationError(DatabaseConnectionError):
    """The engine behind the pool could not be created."""


class StatementFailedError(DataAccessError):
    """The store rejected or failed a statement."""

    kind = ErrorKind.STATEMENT

    def __init__(self, operation: str, statement: str, detail: Optional[str] = None) -> None:
        """Initialize statement failure.

        Args:
            operation: Pattern that failed (query, update or insert)
            statement: SQL text of the failing statement, for diagnostics only
            detail: Optional detail from the database error
        """
        super().__init__(
            f"Database {operation} failed",
            operation=operation,
            statement=statement,
            detail=detail,
        )
        self.operation = operation
        self.statement = statement
        self.detail = detail


class InsertIntegrityError(DataAccessError):
    """An insert affected no row or reported no generated key."""

    kind = ErrorKind.INSERT_INTEGRITY

    def __init__(self, reason: str, statement: str) -> None:
        super().__init__(f"Insert failed: {reason}", statement=statement)
        self.reason = reason
        self.statement = statement


class TransactionError(DataAccessError):
    """A unit of work failed and its transaction was rolled back."""

    kind = ErrorKind.TRANSACTION
