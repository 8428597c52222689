"""Product data-access object."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import Boolean, DateTime, Numeric
from sqlalchemy.engine import Connection, Row

from .base import BaseDAO
from .entities import Product

TABLE_NAME = 'products'

COLUMNS = 'id, name, description, price, stock, category, active, created_at, updated_at'

# Result column types so every driver hands back the same Python types
RESULT_TYPES = {
    'price': Numeric(10, 2, asdecimal=True),
    'active': Boolean(),
    'created_at': DateTime(),
    'updated_at': DateTime(),
}

class ProductDAO(BaseDAO):
    """CRUD operations on the products table."""

    def _query(self, sql: str, *params) -> List[Product]:
        return self.execute_query(sql, self.map_row, *params, result_types=RESULT_TYPES)

    def find_all(self) -> List[Product]:
        """Get all active products ordered by name."""
        sql = f"SELECT {COLUMNS} FROM {TABLE_NAME} WHERE active = true ORDER BY name"
        return self._query(sql)

    def find_by_id(self, product_id: int) -> Optional[Product]:
        """Find a product by id, active or not."""
        sql = f"SELECT {COLUMNS} FROM {TABLE_NAME} WHERE id = ?"
        products = self._query(sql, product_id)
        return products[0] if products else None

    def find_by_category(self, category: str) -> List[Product]:
        """Find active products in a category."""
        sql = f"SELECT {COLUMNS} FROM {TABLE_NAME} WHERE category = ? AND active = true ORDER BY name"
        return self._query(sql, category)

    def find_by_name(self, name: str) -> List[Product]:
        """Find active products whose name contains ``name``, ignoring case."""
        sql = f"SELECT {COLUMNS} FROM {TABLE_NAME} WHERE LOWER(name) LIKE LOWER(?) AND active = true ORDER BY name"
        return self._query(sql, f"%{name}%")

    def find_by_price_range(self, min_price: Decimal, max_price: Decimal) -> List[Product]:
        """Find active products priced between the bounds, inclusive, cheapest first."""
        sql = f"SELECT {COLUMNS} FROM {TABLE_NAME} WHERE price BETWEEN ? AND ? AND active = true ORDER BY price"
        return self._query(sql, min_price, max_price)

    def save(self, product: Product, conn: Optional[Connection] = None) -> int:
        """Insert a new product.

        Stamps both timestamps and assigns the generated id to ``product``.

        Returns:
            The new product id
        """
        sql = (
            f"INSERT INTO {TABLE_NAME} "
            "(name, description, price, stock, category, active, created_at, updated_at) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?) RETURNING id"
        )
        now = datetime.now()
        product.created_at = now
        product.updated_at = now

        product_id = self.execute_insert(
            sql,
            product.name,
            product.description,
            product.price,
            product.stock,
            product.category,
            product.active,
            product.created_at,
            product.updated_at,
            conn=conn
        )
        product.id = product_id
        self.logger.debug(f"Saved product {product_id}: {product.name}")
        return product_id

    def update(self, product: Product, conn: Optional[Connection] = None) -> bool:
        """Overwrite every field of an existing product except id and created_at.

        Returns:
            True if a row was updated
        """
        sql = (
            f"UPDATE {TABLE_NAME} "
            "SET name = ?, description = ?, price = ?, stock = ?, category = ?, active = ?, updated_at = ? "
            "WHERE id = ?"
        )
        product.updated_at = datetime.now()

        rows_affected = self.execute_update(
            sql,
            product.name,
            product.description,
            product.price,
            product.stock,
            product.category,
            product.active,
            product.updated_at,
            product.id,
            conn=conn
        )
        return rows_affected > 0

    def update_stock(self, product_id: int, stock: int, conn: Optional[Connection] = None) -> bool:
        """Set the stock of a product."""
        sql = f"UPDATE {TABLE_NAME} SET stock = ?, updated_at = ? WHERE id = ?"
        return self.execute_update(sql, stock, datetime.now(), product_id, conn=conn) > 0

    def delete(self, product_id: int, conn: Optional[Connection] = None) -> bool:
        """Soft delete: mark the product inactive.

        The row stays readable through ``find_by_id`` but drops out of every
        active listing.
        """
        sql = f"UPDATE {TABLE_NAME} SET active = false, updated_at = ? WHERE id = ?"
        return self.execute_update(sql, datetime.now(), product_id, conn=conn) > 0

    def delete_physically(self, product_id: int, conn: Optional[Connection] = None) -> bool:
        """Remove the product row permanently."""
        sql = f"DELETE FROM {TABLE_NAME} WHERE id = ?"
        return self.execute_update(sql, product_id, conn=conn) > 0

    def count_active_products(self) -> int:
        """Count active products."""
        sql = f"SELECT COUNT(*) FROM {TABLE_NAME} WHERE active = true"
        results = self.execute_query(sql, lambda row: int(row[0]))
        return results[0] if results else 0

    @staticmethod
    def map_row(row: Row) -> Product:
        """Convert a products row into a ``Product``."""
        price = row.price
        if price is not None and not isinstance(price, Decimal):
            price = Decimal(str(price))
        return Product(
            id=row.id,
            name=row.name,
            description=row.description,
            price=price,
            stock=row.stock,
            category=row.category,
            active=bool(row.active),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
