"""
Customer Model.
"""

from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Customer(Base):
    """
    Customer that sales are made to.

    Columns keep the legacy Portuguese names of the "clientes" table.
    """

    __tablename__ = "clientes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column("nome", String(100), nullable=False)
    phone: Mapped[str] = mapped_column("telefone", String(45), nullable=False)
    company: Mapped[str] = mapped_column("empresa", String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<Customer(id={self.id}, name={self.name!r})>"
