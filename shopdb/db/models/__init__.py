"""SQLAlchemy models for database tables."""

from .base import Base
from .product import ProductRow

__all__ = [
    'Base',
    'ProductRow'
]
