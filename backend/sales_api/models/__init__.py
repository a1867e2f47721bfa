"""
SQLAlchemy ORM Models Package.

- base: Base class
- customer: Customer ("clientes")
- product: Product ("produtos")
- sale: Sale ("vendas"), LineItem ("itens")
"""

from .base import Base
from .customer import Customer
from .product import Product
from .sale import LineItem, Sale

__all__ = [
    "Base",
    "Customer",
    "Product",
    "Sale",
    "LineItem",
]
