"""
rbac_platform.auth_service.repositories.users

Repository for `User` entities.

Responsibilities:
- Create and fetch users (by id or email).
- Persist account flag changes and deletions.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rbac_platform.auth_service.models import Role, User


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        email: str,
        password_hash: str,
        full_name: str | None,
        roles: list[Role],
        enabled: bool = True,
        locked: bool = False,
    ) -> User:
        user = User(
            email=email,
            password_hash=password_hash,
            full_name=full_name,
            roles=roles,
            enabled=enabled,
            locked=locked,
        )
        self._session.add(user)
        await self._session.flush()
        return user

    async def get(self, user_id: int) -> User | None:
        return await self._session.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        return await self.get_by_email(email) is not None

    async def list_all(self) -> list[User]:
        stmt = select(User).order_by(User.id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def delete(self, user: User) -> None:
        await self._session.delete(user)
        await self._session.flush()


# --- Module Notes -----------------------------------------------------------
# Email lookups are exact-match; callers normalize case before calling.
