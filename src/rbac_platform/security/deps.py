"""
rbac_platform.security.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Expose the middleware-populated `Principal` to endpoints.
- Enforce per-endpoint permissions via a reusable dependency factory.

Permission sources, in order:
1. The principal decoded from the bearer token by `JwtAuthenticationMiddleware`.
2. The `X-User-Permissions` header set by an upstream proxy (when
   `trust_gateway_headers` is enabled).
"""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from rbac_platform.api.deps import settings_dep
from rbac_platform.observability.logging import get_logger
from rbac_platform.security.jwt import split_claim
from rbac_platform.security.models import Principal
from rbac_platform.settings import Settings

log = get_logger(__name__)

PERMISSIONS_HEADER = "X-User-Permissions"
EMAIL_HEADER = "X-User-Email"


def optional_principal(request: Request) -> Principal | None:
    return getattr(request.state, "principal", None)


def get_principal(principal: Principal | None = Depends(optional_principal)) -> Principal:
    if principal is None:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return principal


def permissions_from_header(value: str | None) -> frozenset[str]:
    return frozenset(split_claim(value))


def require_permission(permission: str):
    def _dep(
        request: Request,
        principal: Principal | None = Depends(optional_principal),
        settings: Settings = Depends(settings_dep),
    ) -> Principal | None:
        if principal is not None:
            granted = frozenset(principal.permissions)
            user_email = principal.email
        elif settings.trust_gateway_headers:
            granted = permissions_from_header(request.headers.get(PERMISSIONS_HEADER))
            user_email = request.headers.get(EMAIL_HEADER)
        else:
            granted = frozenset()
            user_email = None

        if not granted:
            log.warning("permission_denied", reason="no_permissions", user=user_email)
            raise HTTPException(
                status_code=HTTP_403_FORBIDDEN, detail="Access denied: No permissions found"
            )

        if permission not in granted:
            log.warning("permission_denied", user=user_email, required=permission)
            raise HTTPException(
                status_code=HTTP_403_FORBIDDEN,
                detail=(
                    f"Access denied: User '{user_email or 'unknown'}' "
                    f"does not have permission '{permission}'"
                ),
            )

        log.debug("permission_granted", user=user_email, required=permission)
        return principal

    return _dep


# --- Module Notes -----------------------------------------------------------
# Routers attach the gate as `dependencies=[Depends(require_permission("..."))]`
# so the check runs before the endpoint body.
