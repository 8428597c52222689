"""Walk through every product DAO operation against a live database."""

import logging
from decimal import Decimal

import click

from ..cli.base import BaseCommand, command_error_handler
from ..dao import Product, ProductDAO
from ..db.exceptions import DataAccessError
from ..db.pool import ConnectionPool

logger = logging.getLogger(__name__)

TROUBLESHOOTING_HINTS = [
    "1. That PostgreSQL is running",
    "2. That the configured database exists",
    "3. That the credentials in your settings file are correct",
    "4. That the products table exists (run `shopdb init-db`)",
]

def run_demo(pool: ConnectionPool, dao: ProductDAO, category: str = 'Electronics') -> bool:
    """Exercise each DAO operation in sequence, logging the results.

    Data-access failures end the demo early instead of propagating.

    Args:
        pool: Pool the DAO draws from, used for statistics
        dao: Product DAO to exercise
        category: Category to list in the category step

    Returns:
        bool: True if every step ran
    """
    logger.info("=== Demonstrating CRUD operations ===")

    try:
        logger.info("1. Listing all products:")
        for product in dao.find_all():
            logger.info(f"  - {product.name} | ${product.price} | Stock: {product.stock}")

        logger.info(f"2. Products in category '{category}':")
        for product in dao.find_by_category(category):
            logger.info(f"  - {product.name} | ${product.price}")

        logger.info("3. Creating a new product:")
        new_product = Product(
            name='Samsung Galaxy Tab S9',
            description='Premium tablet with an 11 inch AMOLED display',
            price=Decimal('649.99'),
            stock=15,
            category=category,
        )
        new_id = dao.save(new_product)
        logger.info(f"  Product created with ID: {new_id}")

        logger.info("4. Looking up the new product:")
        found = dao.find_by_id(new_id)
        if found is not None:
            logger.info(f"  - Found: {found.name} | ${found.price} | ID: {found.id}")

            logger.info("5. Updating the product price:")
            found.price = Decimal('599.99')
            if dao.update(found):
                logger.info(f"  Price updated to ${found.price}")

            logger.info("6. Updating the product stock:")
            if dao.update_stock(new_id, 20):
                logger.info("  Stock updated to 20 units")

        logger.info("7. Products between $100 and $500:")
        for product in dao.find_by_price_range(Decimal('100'), Decimal('500')):
            logger.info(f"  - {product.name} | ${product.price}")

        logger.info("8. Products containing 'Samsung':")
        for product in dao.find_by_name('Samsung'):
            logger.info(f"  - {product.name} | ${product.price}")

        logger.info("9. Statistics:")
        logger.info(f"  - Active products: {dao.count_active_products()}")

        logger.info("10. Deactivating the new product:")
        if dao.delete(new_id):
            still_listed = any(p.id == new_id for p in dao.find_all())
            logger.info(f"  Product {new_id} deactivated, still listed: {still_listed}")

        logger.info("11. Removing the new product permanently:")
        if dao.delete_physically(new_id):
            logger.info(f"  Product {new_id} removed")

        logger.info("12. Connection pool status:")
        pool.log_stats()

    except DataAccessError as e:
        logger.error(f"Error during CRUD operations ({e.kind.value}): {e.message}")
        return False

    return True

class DemoCommand(BaseCommand):
    """Run the CRUD walkthrough."""

    @command_error_handler
    def execute(self) -> None:
        """Execute the command."""
        self.logger.info("=== Starting product demo ===")

        if not self.pool.test_connection():
            self.logger.error("Could not connect to the database")
            self.logger.error("Please check:")
            for hint in TROUBLESHOOTING_HINTS:
                self.logger.error(hint)
            click.secho("Database unavailable, demo skipped", fg='red', err=True)
            raise click.Abort()

        completed = run_demo(self.pool, self.product_dao())
        if completed:
            click.secho("Demo completed", fg='green')
        else:
            click.secho("Demo stopped after a database error", fg='yellow')
        self.logger.info("=== Demo finished ===")
