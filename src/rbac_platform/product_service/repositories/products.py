from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rbac_platform.product_service.models import Product


class ProductRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        name: str,
        description: str | None,
        price: Decimal,
        stock: int,
        category: str | None,
    ) -> Product:
        product = Product(
            name=name, description=description, price=price, stock=stock, category=category
        )
        self._session.add(product)
        await self._session.flush()
        return product

    async def get(self, product_id: int) -> Product | None:
        return await self._session.get(Product, product_id)

    async def list_all(self) -> list[Product]:
        stmt = select(Product).order_by(Product.id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def list_by_category(self, category: str) -> list[Product]:
        stmt = select(Product).where(Product.category == category).order_by(Product.id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def delete(self, product: Product) -> None:
        await self._session.delete(product)
        await self._session.flush()
