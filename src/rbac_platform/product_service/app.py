"""
rbac_platform.product_service.app

FastAPI app factory for the product service.

Responsibilities:
- Mount the product router.
- Run authentication in required mode: every non-health request needs a valid bearer token.
"""

from __future__ import annotations

from fastapi import FastAPI

from rbac_platform.api.app import create_service_app
from rbac_platform.product_service.models import ProductBase
from rbac_platform.product_service.routers.products import router as products_router
from rbac_platform.settings import Settings


def create_app(*, settings: Settings) -> FastAPI:
    return create_service_app(
        settings=settings,
        title="Product Service",
        service_name=f"{settings.service_name}-product",
        database_url=settings.product_database_url,
        metadata=ProductBase.metadata,
        routers=[products_router],
        jwt_required=True,
    )
