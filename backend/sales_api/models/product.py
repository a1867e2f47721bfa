"""
Product Model.
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Product(Base):
    """
    Sellable product.

    image holds the file name of the stored product picture (relative to
    settings.media_dir), never the picture bytes.
    """

    __tablename__ = "produtos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column("nome", String(100), nullable=False)
    image: Mapped[str] = mapped_column("imagem", String(255), nullable=False)
    price: Mapped[Decimal] = mapped_column("valor", Numeric(10, 2), nullable=False)

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name={self.name!r}, price={self.price})>"
