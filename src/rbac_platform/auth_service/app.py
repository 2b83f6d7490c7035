"""
rbac_platform.auth_service.app

FastAPI app factory for the auth service.

Responsibilities:
- Mount account, init and RBAC administration routers.
- Run authentication in optional mode: register/login/init stay anonymous,
  everything else reads the principal when a bearer token is sent.
"""

from __future__ import annotations

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rbac_platform.api.app import create_service_app
from rbac_platform.auth_service.models import AuthBase
from rbac_platform.auth_service.routers.auth import router as auth_router
from rbac_platform.auth_service.routers.init import router as init_router
from rbac_platform.auth_service.routers.permissions import router as permissions_router
from rbac_platform.auth_service.routers.roles import router as roles_router
from rbac_platform.auth_service.routers.users import router as users_router
from rbac_platform.auth_service.services.seed import seed_on_startup
from rbac_platform.settings import Settings

PUBLIC_PATHS = ("/register", "/login", "/init/")


def create_app(*, settings: Settings) -> FastAPI:
    async def _seed(session_factory: async_sessionmaker[AsyncSession]) -> None:
        if settings.seed_admin_on_startup:
            await seed_on_startup(session_factory, settings)

    return create_service_app(
        settings=settings,
        title="Auth Service",
        service_name=f"{settings.service_name}-auth",
        database_url=settings.auth_database_url,
        metadata=AuthBase.metadata,
        routers=[auth_router, init_router, users_router, roles_router, permissions_router],
        jwt_required=False,
        public_paths=PUBLIC_PATHS,
        on_startup=_seed,
    )
