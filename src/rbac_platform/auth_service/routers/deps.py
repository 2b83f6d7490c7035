from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rbac_platform.api.deps import db_session, settings_dep
from rbac_platform.auth_service.services.auth import AuthService
from rbac_platform.auth_service.services.permissions import PermissionService
from rbac_platform.auth_service.services.roles import RoleService
from rbac_platform.settings import Settings


def auth_service_dep(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> AuthService:
    return AuthService(session=session, settings=settings)


def role_service_dep(session: AsyncSession = Depends(db_session)) -> RoleService:
    return RoleService(session=session)


def permission_service_dep(session: AsyncSession = Depends(db_session)) -> PermissionService:
    return PermissionService(session=session)
