"""
rbac_platform.api.app

Shared FastAPI composition for the auth and product services.

Responsibilities:
- Build a FastAPI application and register middleware, exception handlers and routers.
- Initialize and dispose the service's DB engine/session factory.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable, Iterable, Sequence
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rbac_platform import __version__
from rbac_platform.api.routers.health import HEALTH_PATHS
from rbac_platform.api.routers.health import router as health_router
from rbac_platform.db.init_db import init_db
from rbac_platform.db.session import create_engine, create_sessionmaker
from rbac_platform.errors import install_exception_handlers
from rbac_platform.observability.logging import configure_logging, get_logger
from rbac_platform.observability.middleware import RequestContextMiddleware
from rbac_platform.security.jwt import JwtConfig
from rbac_platform.security.middleware import JwtAuthenticationMiddleware
from rbac_platform.settings import Settings

log = get_logger(__name__)

DOC_PATHS = ("/docs", "/docs/", "/openapi.json")

StartupHook = Callable[[async_sessionmaker[AsyncSession]], Awaitable[None]]


def create_service_app(
    *,
    settings: Settings,
    title: str,
    service_name: str,
    database_url: str,
    metadata: MetaData,
    routers: Sequence[APIRouter],
    jwt_required: bool,
    public_paths: Iterable[str] = (),
    on_startup: StartupHook | None = None,
) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(service_name=service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(database_url)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Dev/test convenience: create tables automatically.
            await init_db(engine, metadata)
        if on_startup is not None:
            await on_startup(app.state.sessionmaker)
        try:
            yield
        finally:
            # Dispose the engine to close pools/FDs gracefully.
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title=title,
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Starlette runs the last-added middleware first: request context wraps authentication.
    app.add_middleware(
        JwtAuthenticationMiddleware,
        jwt_config=JwtConfig.from_settings(settings),
        required=jwt_required,
        public_paths=(*HEALTH_PATHS, *DOC_PATHS, *public_paths),
    )
    app.add_middleware(RequestContextMiddleware)
    install_exception_handlers(app)

    app.include_router(health_router, tags=["health"])
    for router in routers:
        app.include_router(router)

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; business logic lives in each service's routers/services
# layers.
