"""
rbac_platform.auth_service.routers.users

User administration endpoints (`/api/users`).

Responsibilities:
- CRUD over user accounts (including enable/lock flags).
- Assign and remove roles.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from rbac_platform.auth_service.routers.deps import auth_service_dep
from rbac_platform.auth_service.schemas import Password, UserResponse
from rbac_platform.auth_service.services.auth import AuthService
from rbac_platform.security.deps import require_permission

router = APIRouter(prefix="/api/users", tags=["users"])


class CreateUserRequest(BaseModel):
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: Password
    full_name: str | None = Field(default=None, max_length=255)
    # Empty -> the default ROLE_USER.
    role_ids: set[int] = Field(default_factory=set)


class UpdateUserRequest(BaseModel):
    full_name: str | None = Field(default=None, max_length=255)
    enabled: bool | None = None
    locked: bool | None = None


class AssignRolesRequest(BaseModel):
    role_ids: set[int] = Field(min_length=1)


@router.post(
    "",
    response_model=UserResponse,
    status_code=HTTP_201_CREATED,
    dependencies=[Depends(require_permission("CREATE_USER"))],
)
async def create_user(body: CreateUserRequest, svc: AuthService = Depends(auth_service_dep)):
    return await svc.create_user(
        email=body.email,
        password=body.password,
        full_name=body.full_name,
        role_ids=body.role_ids,
    )


@router.get(
    "",
    response_model=list[UserResponse],
    dependencies=[Depends(require_permission("READ_USER"))],
)
async def list_users(svc: AuthService = Depends(auth_service_dep)):
    return await svc.list_users()


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    dependencies=[Depends(require_permission("READ_USER"))],
)
async def get_user(user_id: int, svc: AuthService = Depends(auth_service_dep)):
    return await svc.get_user(user_id)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    dependencies=[Depends(require_permission("UPDATE_USER"))],
)
async def update_user(
    user_id: int, body: UpdateUserRequest, svc: AuthService = Depends(auth_service_dep)
):
    return await svc.update_user(
        user_id, full_name=body.full_name, enabled=body.enabled, locked=body.locked
    )


@router.delete(
    "/{user_id}",
    status_code=HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission("DELETE_USER"))],
)
async def delete_user(user_id: int, svc: AuthService = Depends(auth_service_dep)) -> Response:
    await svc.delete_user(user_id)
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.post(
    "/{user_id}/roles",
    response_model=UserResponse,
    dependencies=[Depends(require_permission("ASSIGN_ROLES"))],
)
async def assign_roles(
    user_id: int, body: AssignRolesRequest, svc: AuthService = Depends(auth_service_dep)
):
    return await svc.assign_roles(user_id, body.role_ids)


@router.delete(
    "/{user_id}/roles",
    response_model=UserResponse,
    dependencies=[Depends(require_permission("ASSIGN_ROLES"))],
)
async def remove_roles(
    user_id: int, body: AssignRolesRequest, svc: AuthService = Depends(auth_service_dep)
):
    return await svc.remove_roles(user_id, body.role_ids)


# --- Module Notes -----------------------------------------------------------
# Role changes reach a user's token claims at their next login.
