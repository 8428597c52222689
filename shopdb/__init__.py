"""Product catalog database access package."""

from .config import ConfigSource, DatabaseConfig
from .dao import BaseDAO, Product, ProductDAO
from .db import ConnectionPool, DataAccessError, ErrorKind, PoolStats

__all__ = [
    'BaseDAO',
    'ConfigSource',
    'ConnectionPool',
    'DataAccessError',
    'DatabaseConfig',
    'ErrorKind',
    'PoolStats',
    'Product',
    'ProductDAO',
]
