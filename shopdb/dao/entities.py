"""In-memory records handled by the DAOs."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

@dataclass
class Product:
    """A catalog product.

    ``id`` and both timestamps are filled in by ``ProductDAO.save``. Price and
    stock must not be negative; the database enforces it.
    """

    name: str
    price: Decimal
    category: str
    description: Optional[str] = None
    stock: int = 0
    active: bool = True
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
