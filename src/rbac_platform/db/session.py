"""
rbac_platform.db.session

Async SQLAlchemy engine + session factory helpers.

Responsibilities:
- Create the async engine for a service database URL.
- Create the async sessionmaker with safe defaults.
- Translate unique-constraint violations on writes into `ConflictError`.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from rbac_platform.errors import ConflictError
from rbac_platform.observability.logging import get_logger

log = get_logger(__name__)


def create_engine(database_url: str) -> AsyncEngine:
    # pool_pre_ping helps detect stale connections in long-lived processes.
    return create_async_engine(database_url, pool_pre_ping=True)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False avoids surprising lazy loads after commits.
    return async_sessionmaker(
        bind=engine,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def conflict_on_duplicate(session: AsyncSession, message: str) -> AsyncIterator[None]:
    """
    Wrap a flush/commit that inserts a uniquely-named row.

    A concurrent writer can pass the service's existence check and commit first; the
    loser's unique-constraint failure is rolled back and surfaced as `ConflictError`.
    """
    try:
        yield
    except IntegrityError as e:
        await session.rollback()
        log.info("write_conflict", message=message, error=str(e.orig))
        raise ConflictError(message) from e
