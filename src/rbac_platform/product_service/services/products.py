"""
rbac_platform.product_service.services.products

Product catalog service (transaction owner).
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from rbac_platform.errors import NotFoundError
from rbac_platform.observability.logging import get_logger
from rbac_platform.product_service.models import Product
from rbac_platform.product_service.repositories.products import ProductRepo

log = get_logger(__name__)


class ProductService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._products = ProductRepo(session)

    async def create(
        self,
        *,
        name: str,
        description: str | None,
        price: Decimal,
        stock: int,
        category: str | None,
    ) -> Product:
        product = await self._products.create(
            name=name, description=description, price=price, stock=stock, category=category
        )
        await self._session.commit()
        log.info("product_created", product_id=product.id)
        return product

    async def list_all(self) -> list[Product]:
        return await self._products.list_all()

    async def get(self, product_id: int) -> Product:
        product = await self._products.get(product_id)
        if product is None:
            raise NotFoundError(f"Product not found with id: {product_id}")
        return product

    async def list_by_category(self, category: str) -> list[Product]:
        return await self._products.list_by_category(category)

    async def replace(
        self,
        product_id: int,
        *,
        name: str,
        description: str | None,
        price: Decimal,
        stock: int,
        category: str | None,
    ) -> Product:
        product = await self.get(product_id)
        product.name = name
        product.description = description
        product.price = price
        product.stock = stock
        product.category = category
        await self._session.commit()
        log.info("product_updated", product_id=product_id)
        return product

    async def delete(self, product_id: int) -> None:
        product = await self.get(product_id)
        await self._products.delete(product)
        await self._session.commit()
        log.info("product_deleted", product_id=product_id)
