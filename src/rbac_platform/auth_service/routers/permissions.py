from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel, Field
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from rbac_platform.auth_service.routers.deps import permission_service_dep
from rbac_platform.auth_service.schemas import PermissionResponse
from rbac_platform.auth_service.services.permissions import PermissionService
from rbac_platform.security.deps import require_permission

router = APIRouter(prefix="/api/permissions", tags=["permissions"])


class CreatePermissionRequest(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    description: str | None = Field(default=None, max_length=500)
    resource: str = Field(min_length=1, max_length=64)
    action: str = Field(min_length=1, max_length=64)


@router.post(
    "",
    response_model=PermissionResponse,
    status_code=HTTP_201_CREATED,
    dependencies=[Depends(require_permission("CREATE_PERMISSION"))],
)
async def create_permission(
    body: CreatePermissionRequest,
    svc: PermissionService = Depends(permission_service_dep),
):
    return await svc.create(
        name=body.name, description=body.description, resource=body.resource, action=body.action
    )


@router.get(
    "",
    response_model=list[PermissionResponse],
    dependencies=[Depends(require_permission("READ_PERMISSION"))],
)
async def list_permissions(svc: PermissionService = Depends(permission_service_dep)):
    return await svc.list_all()


@router.get(
    "/resource/{resource}",
    response_model=list[PermissionResponse],
    dependencies=[Depends(require_permission("READ_PERMISSION"))],
)
async def list_permissions_by_resource(
    resource: str, svc: PermissionService = Depends(permission_service_dep)
):
    return await svc.list_by_resource(resource)


@router.get(
    "/name/{name}",
    response_model=PermissionResponse,
    dependencies=[Depends(require_permission("READ_PERMISSION"))],
)
async def get_permission_by_name(
    name: str, svc: PermissionService = Depends(permission_service_dep)
):
    return await svc.get_by_name(name)


@router.get(
    "/{permission_id}",
    response_model=PermissionResponse,
    dependencies=[Depends(require_permission("READ_PERMISSION"))],
)
async def get_permission(
    permission_id: int, svc: PermissionService = Depends(permission_service_dep)
):
    return await svc.get(permission_id)


@router.put(
    "/{permission_id}",
    response_model=PermissionResponse,
    dependencies=[Depends(require_permission("UPDATE_PERMISSION"))],
)
async def update_permission(
    permission_id: int,
    description: str = Query(max_length=500),
    svc: PermissionService = Depends(permission_service_dep),
):
    return await svc.update_description(permission_id, description)


@router.delete(
    "/{permission_id}",
    status_code=HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission("DELETE_PERMISSION"))],
)
async def delete_permission(
    permission_id: int, svc: PermissionService = Depends(permission_service_dep)
) -> Response:
    await svc.delete(permission_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
