"""Data-access objects for the product catalog."""

from .base import BaseDAO, bind_positional
from .entities import Product
from .product import ProductDAO

__all__ = ['BaseDAO', 'Product', 'ProductDAO', 'bind_positional']
