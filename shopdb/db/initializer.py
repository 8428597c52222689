"""Schema creation and sample data for the products table."""

import logging
from decimal import Decimal

from sqlalchemy import func, insert, select
from sqlalchemy.exc import SQLAlchemyError

from .exceptions import DatabaseConnectionError, StatementFailedError
from .models import Base, ProductRow
from .pool import ConnectionPool

logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS = [
    {
        'name': 'Laptop Dell XPS 13',
        'description': 'Ultraportable laptop with Intel i7, 16GB RAM, 512GB SSD',
        'price': Decimal('1299.99'),
        'stock': 10,
        'category': 'Electronics',
    },
    {
        'name': 'iPhone 15 Pro',
        'description': 'Apple smartphone with A17 Pro chip, 128GB storage',
        'price': Decimal('999.99'),
        'stock': 25,
        'category': 'Electronics',
    },
    {
        'name': 'Nike Dri-Fit T-Shirt',
        'description': 'High quality sports shirt with Dri-Fit technology',
        'price': Decimal('29.99'),
        'stock': 50,
        'category': 'Clothing',
    },
    {
        'name': 'Adidas Ultraboost Sneakers',
        'description': 'Running shoes with Boost technology',
        'price': Decimal('179.99'),
        'stock': 30,
        'category': 'Footwear',
    },
    {
        'name': 'Book: Clean Code',
        'description': 'Book on programming and software craftsmanship',
        'price': Decimal('39.99'),
        'stock': 15,
        'category': 'Books',
    },
    {
        'name': 'Premium Gourmet Coffee',
        'description': 'Colombian single-origin coffee, artisan roasted',
        'price': Decimal('24.99'),
        'stock': 100,
        'category': 'Food',
    },
    {
        'name': 'Samsung 27" Monitor',
        'description': '27 inch 4K UHD monitor for office and gaming',
        'price': Decimal('299.99'),
        'stock': 8,
        'category': 'Electronics',
    },
    {
        'name': 'Sports Backpack',
        'description': 'Water resistant backpack with multiple compartments',
        'price': Decimal('49.99'),
        'stock': 40,
        'category': 'Accessories',
    },
]

def create_schema(pool: ConnectionPool) -> None:
    """Create the products table and its indexes if they do not exist."""
    logger.info("Creating products table...")
    try:
        Base.metadata.create_all(pool.engine)
    except SQLAlchemyError as e:
        raise StatementFailedError('create schema', f"CREATE TABLE {ProductRow.__tablename__}", detail=str(e)) from e
    logger.info("Products table and indexes ready")

def initialize_database(pool: ConnectionPool) -> int:
    """Create the schema and seed sample products into an empty table.

    Args:
        pool: Connection pool to initialize

    Returns:
        Number of sample products inserted, 0 if the table already had rows

    Raises:
        DatabaseConnectionError: If the database is unreachable
    """
    if not pool.test_connection():
        raise DatabaseConnectionError("Cannot connect to the database")

    create_schema(pool)

    table = ProductRow.__table__
    try:
        with pool.acquire() as conn:
            count = conn.execute(select(func.count()).select_from(table)).scalar_one()
            if count:
                logger.info(f"Table already contains {count} products")
                return 0

            logger.info("Inserting sample products...")
            conn.execute(insert(table), SAMPLE_PRODUCTS)
            conn.commit()
    except SQLAlchemyError as e:
        raise StatementFailedError('seed', str(insert(table)), detail=str(e)) from e

    logger.info(f"Inserted {len(SAMPLE_PRODUCTS)} sample products")
    return len(SAMPLE_PRODUCTS)
