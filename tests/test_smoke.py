"""
tests.test_smoke

Minimal smoke tests to validate both services boot and serve their probes.

Responsibilities:
- Ensure each FastAPI app starts and its DB readiness probe works in test mode.
"""

from __future__ import annotations

import httpx
import pytest

from rbac_platform.auth_service.app import create_app as create_auth_app
from rbac_platform.product_service.app import create_app as create_product_app
from rbac_platform.settings import Settings


@pytest.mark.asyncio
@pytest.mark.parametrize("factory", [create_auth_app, create_product_app])
async def test_health_endpoints(factory, settings: Settings) -> None:
    app = factory(settings=settings)

    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            r = await client.get("/healthz")
            assert r.status_code == 200
            assert r.json()["status"] == "ok"

            r = await client.get("/readyz")
            assert r.status_code == 200
            assert r.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_admin_seeded_on_startup(settings: Settings) -> None:
    app = create_auth_app(settings=settings.model_copy(update={"seed_admin_on_startup": True}))

    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            r = await client.post(
                "/login", json={"email": "admin@example.com", "password": "admin123"}
            )
            assert r.status_code == 200
            assert "ROLE_ADMIN" in r.json()["roles"]

            r = await client.post("/init/admin")
            assert r.json()["message"] == "Data already initialized. Admin user exists."
