from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_200_OK, HTTP_201_CREATED

from rbac_platform.api.deps import db_session, settings_dep
from rbac_platform.auth_service.services.seed import DataInitializer
from rbac_platform.observability.logging import get_logger
from rbac_platform.settings import Settings

log = get_logger(__name__)

router = APIRouter(prefix="/init", tags=["init"])


@router.post("/admin")
async def initialize_admin_data(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> JSONResponse:
    log.info("init_admin_requested")
    result = await DataInitializer(session=session, settings=settings).initialize()
    return JSONResponse(
        status_code=HTTP_201_CREATED if result.created else HTTP_200_OK,
        content={"message": result.message},
    )


@router.post("/reset")
async def reset_info() -> dict[str, str]:
    return {
        "message": "To reset data, manually clear the database and call /init/admin again"
    }
