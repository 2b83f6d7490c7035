"""
rbac_platform.auth_service.schemas

Response models shared by the auth service routers.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from rbac_platform.security.passwords import MAX_PASSWORD_BYTES


class PermissionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    resource: str
    action: str
    created_at: datetime
    updated_at: datetime


class RoleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    active: bool
    permissions: list[PermissionResponse]
    created_at: datetime
    updated_at: datetime


class RoleSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    active: bool


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    full_name: str | None
    enabled: bool
    locked: bool
    last_login_at: datetime | None
    roles: list[RoleSummary]
    created_at: datetime
    updated_at: datetime


def _fits_bcrypt(value: str) -> str:
    # bcrypt ignores bytes past 72; reject those inputs instead of truncating silently.
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


Password = Annotated[str, Field(min_length=6), AfterValidator(_fits_bcrypt)]
