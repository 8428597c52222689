"""Database access: connection pool, table definitions and schema setup."""

from .exceptions import (
    DataAccessError,
    DatabaseConnectionError,
    ErrorKind,
    InsertIntegrityError,
    PoolClosedError,
    PoolInitializationError,
    StatementFailedError,
    TransactionError,
)
from .pool import ConnectionPool, PoolStats

__all__ = [
    'ConnectionPool',
    'PoolStats',
    'DataAccessError',
    'DatabaseConnectionError',
    'ErrorKind',
    'InsertIntegrityError',
    'PoolClosedError',
    'PoolInitializationError',
    'StatementFailedError',
    'TransactionError',
]
