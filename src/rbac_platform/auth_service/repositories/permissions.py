from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rbac_platform.auth_service.models import Permission, role_permissions


class PermissionRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        name: str,
        description: str | None,
        resource: str,
        action: str,
    ) -> Permission:
        permission = Permission(
            name=name, description=description, resource=resource, action=action
        )
        self._session.add(permission)
        await self._session.flush()
        return permission

    async def get(self, permission_id: int) -> Permission | None:
        return await self._session.get(Permission, permission_id)

    async def get_by_name(self, name: str) -> Permission | None:
        stmt = select(Permission).where(Permission.name == name)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def exists_by_name(self, name: str) -> bool:
        return await self.get_by_name(name) is not None

    async def list_all(self) -> list[Permission]:
        stmt = select(Permission).order_by(Permission.id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def list_by_resource(self, resource: str) -> list[Permission]:
        stmt = select(Permission).where(Permission.resource == resource).order_by(Permission.id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def list_by_ids(self, ids: Iterable[int]) -> list[Permission]:
        stmt = select(Permission).where(Permission.id.in_(list(ids))).order_by(Permission.id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def role_count(self, permission_id: int) -> int:
        stmt = select(func.count()).select_from(role_permissions).where(
            role_permissions.c.permission_id == permission_id
        )
        return int((await self._session.execute(stmt)).scalar_one())

    async def delete(self, permission: Permission) -> None:
        await self._session.delete(permission)
        await self._session.flush()
