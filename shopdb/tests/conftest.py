"""Shared test fixtures and utilities."""

import os
from decimal import Decimal

import pytest

from ..config import DatabaseConfig
from ..dao import Product, ProductDAO
from ..db.initializer import create_schema
from ..db.pool import ConnectionPool

@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Keep DB_* variables of the developer's shell out of the tests."""
    for key in list(os.environ):
        if key.startswith('DB_'):
            monkeypatch.delenv(key)

@pytest.fixture
def database_url(tmp_path):
    """URL of a throwaway SQLite database file."""
    return f"sqlite:///{tmp_path / 'shop.db'}"

@pytest.fixture
def config(database_url):
    """Pool settings pointing at the test database."""
    return DatabaseConfig(
        url=database_url,
        username='',
        password='',
        driver='pysqlite',
        maximum_pool_size=5,
        minimum_idle=2,
        connection_timeout_ms=5000,
    )

@pytest.fixture
def pool(config):
    """Connection pool, shut down after the test."""
    pool = ConnectionPool(config)
    yield pool
    pool.shutdown()

@pytest.fixture
def unreachable_pool(tmp_path):
    """Pool whose database file can never be opened."""
    config = DatabaseConfig(
        url=f"sqlite:///{tmp_path / 'missing' / 'dir' / 'shop.db'}",
        username='',
        password='',
        driver='pysqlite',
    )
    pool = ConnectionPool(config)
    yield pool
    pool.shutdown()

@pytest.fixture
def dao(pool):
    """Product DAO over a freshly created products table."""
    create_schema(pool)
    return ProductDAO(pool)

def make_product(**overrides) -> Product:
    """Create an unsaved product with sensible defaults."""
    values = {
        'name': 'Widget',
        'description': None,
        'price': Decimal('10.00'),
        'stock': 5,
        'category': 'Tools',
    }
    values.update(overrides)
    return Product(**values)

@pytest.fixture
def catalog(dao):
    """A small saved catalog, keyed by name."""
    products = [
        make_product(name='Hammer', price=Decimal('25.50'), stock=12, category='Tools'),
        make_product(name='Screwdriver', price=Decimal('8.99'), stock=40, category='Tools'),
        make_product(name='Samsung Monitor', price=Decimal('299.99'), stock=3, category='Electronics'),
        make_product(name='USB Cable', price=Decimal('5.00'), stock=100, category='Electronics'),
        make_product(name='Desk Lamp', price=Decimal('45.00'), stock=7, category='Home'),
    ]
    for product in products:
        dao.save(product)
    return {product.name: product for product in products}
