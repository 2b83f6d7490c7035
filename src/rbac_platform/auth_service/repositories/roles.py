from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rbac_platform.auth_service.models import Permission, Role, user_roles


class RoleRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        name: str,
        description: str | None,
        permissions: list[Permission],
        active: bool = True,
    ) -> Role:
        role = Role(name=name, description=description, active=active, permissions=permissions)
        self._session.add(role)
        await self._session.flush()
        return role

    async def get(self, role_id: int) -> Role | None:
        return await self._session.get(Role, role_id)

    async def get_by_name(self, name: str) -> Role | None:
        stmt = select(Role).where(Role.name == name)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def exists_by_name(self, name: str) -> bool:
        return await self.get_by_name(name) is not None

    async def list_all(self) -> list[Role]:
        stmt = select(Role).order_by(Role.id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def list_active(self) -> list[Role]:
        stmt = select(Role).where(Role.active.is_(True)).order_by(Role.id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def list_by_ids(self, ids: Iterable[int]) -> list[Role]:
        stmt = select(Role).where(Role.id.in_(list(ids))).order_by(Role.id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def user_count(self, role_id: int) -> int:
        stmt = select(func.count()).select_from(user_roles).where(user_roles.c.role_id == role_id)
        return int((await self._session.execute(stmt)).scalar_one())

    async def delete(self, role: Role) -> None:
        await self._session.delete(role)
        await self._session.flush()
