from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from rbac_platform.auth_service.routers.deps import role_service_dep
from rbac_platform.auth_service.schemas import RoleResponse
from rbac_platform.auth_service.services.roles import RoleService
from rbac_platform.security.deps import require_permission

router = APIRouter(prefix="/api/roles", tags=["roles"])


class CreateRoleRequest(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    description: str | None = Field(default=None, max_length=500)
    permission_ids: set[int] = Field(min_length=1)


class UpdateRoleRequest(BaseModel):
    description: str | None = Field(default=None, max_length=500)
    active: bool | None = None


class RolePermissionsRequest(BaseModel):
    permission_ids: set[int] = Field(min_length=1)


@router.post(
    "",
    response_model=RoleResponse,
    status_code=HTTP_201_CREATED,
    dependencies=[Depends(require_permission("CREATE_ROLE"))],
)
async def create_role(body: CreateRoleRequest, svc: RoleService = Depends(role_service_dep)):
    return await svc.create(
        name=body.name, description=body.description, permission_ids=body.permission_ids
    )


@router.get(
    "",
    response_model=list[RoleResponse],
    dependencies=[Depends(require_permission("READ_ROLE"))],
)
async def list_roles(svc: RoleService = Depends(role_service_dep)):
    return await svc.list_all()


@router.get(
    "/active",
    response_model=list[RoleResponse],
    dependencies=[Depends(require_permission("READ_ROLE"))],
)
async def list_active_roles(svc: RoleService = Depends(role_service_dep)):
    return await svc.list_active()


@router.get(
    "/name/{name}",
    response_model=RoleResponse,
    dependencies=[Depends(require_permission("READ_ROLE"))],
)
async def get_role_by_name(name: str, svc: RoleService = Depends(role_service_dep)):
    return await svc.get_by_name(name)


@router.get(
    "/{role_id}",
    response_model=RoleResponse,
    dependencies=[Depends(require_permission("READ_ROLE"))],
)
async def get_role(role_id: int, svc: RoleService = Depends(role_service_dep)):
    return await svc.get(role_id)


@router.put(
    "/{role_id}",
    response_model=RoleResponse,
    dependencies=[Depends(require_permission("UPDATE_ROLE"))],
)
async def update_role(
    role_id: int, body: UpdateRoleRequest, svc: RoleService = Depends(role_service_dep)
):
    return await svc.update(role_id, description=body.description, active=body.active)


@router.post(
    "/{role_id}/permissions",
    response_model=RoleResponse,
    dependencies=[Depends(require_permission("ASSIGN_PERMISSIONS"))],
)
async def add_permissions_to_role(
    role_id: int, body: RolePermissionsRequest, svc: RoleService = Depends(role_service_dep)
):
    return await svc.add_permissions(role_id, body.permission_ids)


@router.delete(
    "/{role_id}/permissions",
    response_model=RoleResponse,
    dependencies=[Depends(require_permission("ASSIGN_PERMISSIONS"))],
)
async def remove_permissions_from_role(
    role_id: int, body: RolePermissionsRequest, svc: RoleService = Depends(role_service_dep)
):
    return await svc.remove_permissions(role_id, body.permission_ids)


@router.delete(
    "/{role_id}",
    status_code=HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission("DELETE_ROLE"))],
)
async def delete_role(role_id: int, svc: RoleService = Depends(role_service_dep)) -> Response:
    await svc.delete(role_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
