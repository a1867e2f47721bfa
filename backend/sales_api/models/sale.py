"""
Sale and LineItem Models.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base
from .customer import Customer
from .product import Product


class Sale(Base):
    """
    Sale to a customer, owning its line items.

    Items are deleted with the sale and when removed from the collection
    (delete-orphan). customer is a read projection loaded by the repository.
    """

    __tablename__ = "vendas"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    date: Mapped[Optional[datetime]] = mapped_column("data", DateTime, nullable=True)
    total_amount: Mapped[Decimal] = mapped_column("valor_total", Numeric(12, 2), nullable=False)
    customer_id: Mapped[int] = mapped_column(
        "cliente_id", Integer, ForeignKey("clientes.id"), nullable=False, index=True
    )

    customer: Mapped[Optional[Customer]] = relationship()
    items: Mapped[list["LineItem"]] = relationship(
        back_populates="sale",
        cascade="all, delete-orphan",
        order_by="LineItem.id",
    )

    def __repr__(self) -> str:
        return f"<Sale(id={self.id}, customer_id={self.customer_id}, total_amount={self.total_amount})>"


class LineItem(Base):
    """Single product line of a sale."""

    __tablename__ = "itens"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    quantity: Mapped[int] = mapped_column("quantidade", Integer, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column("unitario", Numeric(10, 2), nullable=False)
    product_id: Mapped[int] = mapped_column(
        "produto_id", Integer, ForeignKey("produtos.id"), nullable=False, index=True
    )
    sale_id: Mapped[int] = mapped_column(
        "venda_id", Integer, ForeignKey("vendas.id"), nullable=False, index=True
    )

    product: Mapped[Optional[Product]] = relationship()
    sale: Mapped[Optional[Sale]] = relationship(back_populates="items")

    @property
    def total(self) -> Decimal:
        """Line total (quantity * unit_price)."""
        return self.quantity * self.unit_price

    def __repr__(self) -> str:
        return f"<LineItem(id={self.id}, product_id={self.product_id}, quantity={self.quantity})>"
