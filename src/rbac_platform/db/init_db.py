"""
rbac_platform.db.init_db

DB initialization helpers (dev/test convenience).

Responsibilities:
- Create a service's tables for local development and tests.
"""

from __future__ import annotations

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncEngine


async def init_db(engine: AsyncEngine, metadata: MetaData) -> None:
    """
    Dev/test bootstrap: create tables if they don't exist.
    """

    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
