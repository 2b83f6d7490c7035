"""
tests.conftest

Shared fixtures: isolated settings, per-service ASGI clients and token minting.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Iterable
from contextlib import asynccontextmanager

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from rbac_platform.auth_service.app import create_app as create_auth_app
from rbac_platform.product_service.app import create_app as create_product_app
from rbac_platform.security.jwt import JwtConfig, issue_token
from rbac_platform.settings import Settings

TEST_SECRET = "test-secret-for-the-rbac-platform-suite"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        log_level="WARNING",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        trust_gateway_headers=True,
        auth_database_url=f"sqlite+aiosqlite:///{tmp_path / 'auth.db'}",
        product_database_url=f"sqlite+aiosqlite:///{tmp_path / 'product.db'}",
        admin_email="admin@example.com",
        admin_password="admin123",
    )


@asynccontextmanager
async def _serve(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    # httpx ASGITransport does not manage lifespan; drive it explicitly.
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            yield client


@pytest_asyncio.fixture
async def auth_client(settings: Settings) -> AsyncIterator[httpx.AsyncClient]:
    async with _serve(create_auth_app(settings=settings)) as client:
        yield client


@pytest_asyncio.fixture
async def product_client(settings: Settings) -> AsyncIterator[httpx.AsyncClient]:
    async with _serve(create_product_app(settings=settings)) as client:
        yield client


@pytest.fixture
def mint_token(settings: Settings) -> Callable[..., str]:
    def _mint(
        *,
        permissions: Iterable[str] = (),
        roles: Iterable[str] = ("ROLE_USER",),
        user_id: str = "42",
        email: str = "tester@example.com",
        full_name: str = "Test User",
    ) -> str:
        return issue_token(
            cfg=JwtConfig.from_settings(settings),
            user_id=user_id,
            email=email,
            full_name=full_name,
            roles=roles,
            permissions=permissions,
        )

    return _mint


@pytest_asyncio.fixture
async def admin_token(auth_client: httpx.AsyncClient) -> str:
    r = await auth_client.post("/init/admin")
    assert r.status_code == 201
    r = await auth_client.post(
        "/login", json={"email": "admin@example.com", "password": "admin123"}
    )
    assert r.status_code == 200
    return r.json()["token"]
