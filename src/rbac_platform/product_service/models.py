"""
rbac_platform.product_service.models

Persistence schema for the product catalog.
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Numeric, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from rbac_platform.db.base import AuditMixin


class ProductBase(DeclarativeBase):
    pass


class Product(AuditMixin, ProductBase):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    stock: Mapped[int] = mapped_column(nullable=False, default=0)
    category: Mapped[str | None] = mapped_column(String(128), nullable=True, index=True)


# --- Module Notes -----------------------------------------------------------
# created_by/updated_by come from the caller's token (see `db.base.AuditMixin`).
