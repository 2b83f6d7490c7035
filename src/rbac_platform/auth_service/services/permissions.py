from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from rbac_platform.auth_service.models import Permission
from rbac_platform.auth_service.repositories.permissions import PermissionRepo
from rbac_platform.db.session import conflict_on_duplicate
from rbac_platform.errors import ConflictError, NotFoundError
from rbac_platform.observability.logging import get_logger

log = get_logger(__name__)


class PermissionService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._permissions = PermissionRepo(session)

    async def create(
        self,
        *,
        name: str,
        description: str | None,
        resource: str,
        action: str,
    ) -> Permission:
        if await self._permissions.exists_by_name(name):
            raise ConflictError(f"Permission already exists: {name}")
        async with conflict_on_duplicate(self._session, f"Permission already exists: {name}"):
            permission = await self._permissions.create(
                name=name, description=description, resource=resource, action=action
            )
            await self._session.commit()
        log.info("permission_created", permission=name)
        return permission

    async def list_all(self) -> list[Permission]:
        return await self._permissions.list_all()

    async def get(self, permission_id: int) -> Permission:
        permission = await self._permissions.get(permission_id)
        if permission is None:
            raise NotFoundError(f"Permission not found with id: {permission_id}")
        return permission

    async def get_by_name(self, name: str) -> Permission:
        permission = await self._permissions.get_by_name(name)
        if permission is None:
            raise NotFoundError(f"Permission not found: {name}")
        return permission

    async def list_by_resource(self, resource: str) -> list[Permission]:
        return await self._permissions.list_by_resource(resource)

    async def update_description(self, permission_id: int, description: str) -> Permission:
        permission = await self.get(permission_id)
        permission.description = description
        await self._session.commit()
        return permission

    async def delete(self, permission_id: int) -> None:
        permission = await self.get(permission_id)
        if await self._permissions.role_count(permission_id):
            raise ConflictError("Cannot delete permission that is assigned to roles")
        await self._permissions.delete(permission)
        await self._session.commit()
        log.info("permission_deleted", permission=permission.name)
