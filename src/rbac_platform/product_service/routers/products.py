"""
rbac_platform.product_service.routers.products

Product endpoints (`/products`).

Responsibilities:
- CRUD over products, each endpoint gated by one permission.
- Describe the caller's identity as decoded from the token.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from rbac_platform.api.deps import db_session
from rbac_platform.product_service.services.products import ProductService
from rbac_platform.security.deps import optional_principal, require_permission
from rbac_platform.security.models import Principal, describe_principal

router = APIRouter(prefix="/products", tags=["products"])


class ProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    stock: int = Field(ge=0)
    category: str | None = Field(default=None, max_length=128)


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    price: Decimal
    stock: int
    category: str | None
    created_at: datetime
    updated_at: datetime
    created_by: str | None


def product_service_dep(session: AsyncSession = Depends(db_session)) -> ProductService:
    return ProductService(session=session)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=HTTP_201_CREATED,
    dependencies=[Depends(require_permission("WRITE_PRODUCTS"))],
)
async def create_product(body: ProductRequest, svc: ProductService = Depends(product_service_dep)):
    return await svc.create(**body.model_dump())


@router.get(
    "",
    response_model=list[ProductResponse],
    dependencies=[Depends(require_permission("READ_PRODUCTS"))],
)
async def list_products(svc: ProductService = Depends(product_service_dep)):
    return await svc.list_all()


# Declared before "/{product_id}" so the literal path wins.
@router.get("/user-info", response_class=PlainTextResponse)
async def user_info(principal: Principal | None = Depends(optional_principal)) -> str:
    return describe_principal(principal)


@router.get(
    "/category/{category}",
    response_model=list[ProductResponse],
    dependencies=[Depends(require_permission("READ_PRODUCTS"))],
)
async def list_products_by_category(
    category: str, svc: ProductService = Depends(product_service_dep)
):
    return await svc.list_by_category(category)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    dependencies=[Depends(require_permission("READ_PRODUCTS"))],
)
async def get_product(product_id: int, svc: ProductService = Depends(product_service_dep)):
    return await svc.get(product_id)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    dependencies=[Depends(require_permission("WRITE_PRODUCTS"))],
)
async def update_product(
    product_id: int, body: ProductRequest, svc: ProductService = Depends(product_service_dep)
):
    return await svc.replace(product_id, **body.model_dump())


@router.delete(
    "/{product_id}",
    status_code=HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission("DELETE_PRODUCTS"))],
)
async def delete_product(
    product_id: int, svc: ProductService = Depends(product_service_dep)
) -> Response:
    await svc.delete(product_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
