"""Product table definition."""

from sqlalchemy import BigInteger, Boolean, CheckConstraint, Column, DateTime, Index, Integer, Numeric, String, Text
from sqlalchemy.sql import expression, func

from .base import Base

class ProductRow(Base):
    """Products offered by the store.

    Only used to create the schema; reads and writes go through ``ProductDAO``.
    """

    __tablename__ = 'products'
    __table_args__ = (
        CheckConstraint('price >= 0', name='ck_products_price'),
        CheckConstraint('stock >= 0', name='ck_products_stock'),
        Index('idx_products_category', 'category'),
        Index('idx_products_active', 'active'),
        Index('idx_products_name', 'name'),
        Index('idx_products_price', 'price'),
        {'comment': 'Products of the e-commerce catalog'},
    )

    # SQLite only autoincrements an INTEGER PRIMARY KEY
    id = Column(
        BigInteger().with_variant(Integer, 'sqlite'),
        primary_key=True,
        autoincrement=True,
        comment='Unique product identifier',
    )
    name = Column(String(255), nullable=False, comment='Product name')
    description = Column(Text, comment='Detailed product description')
    price = Column(Numeric(10, 2), nullable=False, comment='Price in the base currency')
    stock = Column(Integer, nullable=False, server_default='0', comment='Units available in inventory')
    category = Column(String(100), nullable=False, comment='Product category')
    active = Column(
        Boolean,
        nullable=False,
        server_default=expression.true(),
        comment='Whether the product is available for sale',
    )
    created_at = Column(DateTime, nullable=False, server_default=func.now(), comment='When the row was created')
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), comment='When the row was last updated')

    def __repr__(self):
        """Return string representation."""
        return f'<ProductRow(id={self.id}, name="{self.name}", category="{self.category}")>'
