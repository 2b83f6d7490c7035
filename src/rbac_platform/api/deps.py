"""
rbac_platform.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings and DB sessions.
- Encapsulate app.state access patterns (settings/sessionmaker).
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rbac_platform.db.base import ACTOR_KEY, SYSTEM_ACTOR
from rbac_platform.settings import Settings


def settings_dep(request: Request) -> Settings:
    # Settings are attached to app.state by `api.app.create_service_app`.
    return request.app.state.settings  # type: ignore[attr-defined]


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    request: Request,
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Commit/rollback is managed explicitly by the service layer.
    principal = getattr(request.state, "principal", None)
    async with session_factory() as session:
        session.info[ACTOR_KEY] = principal.user_id if principal is not None else SYSTEM_ACTOR
        yield session
