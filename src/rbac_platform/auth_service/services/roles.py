"""
rbac_platform.auth_service.services.roles

Role administration service.

Responsibilities:
- Create/update/delete roles with duplicate and in-use checks.
- Grant and revoke permissions on a role.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from rbac_platform.auth_service.models import Permission, Role
from rbac_platform.auth_service.repositories.permissions import PermissionRepo
from rbac_platform.auth_service.repositories.roles import RoleRepo
from rbac_platform.db.session import conflict_on_duplicate
from rbac_platform.errors import ConflictError, NotFoundError
from rbac_platform.observability.logging import get_logger

log = get_logger(__name__)


class RoleService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._roles = RoleRepo(session)
        self._permissions = PermissionRepo(session)

    async def _resolve_permissions(self, permission_ids: set[int]) -> list[Permission]:
        permissions = await self._permissions.list_by_ids(permission_ids)
        missing = sorted(set(permission_ids) - {p.id for p in permissions})
        if missing:
            raise NotFoundError(f"Permission not found: {missing[0]}")
        return permissions

    async def create(self, *, name: str, description: str | None, permission_ids: set[int]) -> Role:
        if await self._roles.exists_by_name(name):
            raise ConflictError(f"Role already exists: {name}")
        permissions = await self._resolve_permissions(permission_ids)
        async with conflict_on_duplicate(self._session, f"Role already exists: {name}"):
            role = await self._roles.create(
                name=name, description=description, permissions=permissions
            )
            await self._session.commit()
        log.info("role_created", role=name, permissions=len(role.permissions))
        return role

    async def list_all(self) -> list[Role]:
        return await self._roles.list_all()

    async def list_active(self) -> list[Role]:
        return await self._roles.list_active()

    async def get(self, role_id: int) -> Role:
        role = await self._roles.get(role_id)
        if role is None:
            raise NotFoundError(f"Role not found with id: {role_id}")
        return role

    async def get_by_name(self, name: str) -> Role:
        role = await self._roles.get_by_name(name)
        if role is None:
            raise NotFoundError(f"Role not found: {name}")
        return role

    async def update(
        self, role_id: int, *, description: str | None = None, active: bool | None = None
    ) -> Role:
        role = await self.get(role_id)
        if description is not None:
            role.description = description
        if active is not None:
            role.active = active
        await self._session.commit()
        return role

    async def add_permissions(self, role_id: int, permission_ids: set[int]) -> Role:
        role = await self.get(role_id)
        current = {p.id for p in role.permissions}
        for permission in await self._resolve_permissions(permission_ids):
            if permission.id not in current:
                role.permissions.append(permission)
        await self._session.commit()
        return role

    async def remove_permissions(self, role_id: int, permission_ids: set[int]) -> Role:
        role = await self.get(role_id)
        role.permissions = [p for p in role.permissions if p.id not in permission_ids]
        await self._session.commit()
        return role

    async def delete(self, role_id: int) -> None:
        role = await self.get(role_id)
        if await self._roles.user_count(role_id):
            raise ConflictError("Cannot delete role that is assigned to users")
        await self._roles.delete(role)
        await self._session.commit()
        log.info("role_deleted", role=role.name)


# --- Module Notes -----------------------------------------------------------
# Permission changes take effect for a user at their next login, when a new token
# is issued; already-issued tokens keep their embedded claims until they expire.
