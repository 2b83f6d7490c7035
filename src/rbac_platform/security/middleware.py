"""
rbac_platform.security.middleware

Bearer-token authentication middleware.

Responsibilities:
- Verify the `Authorization: Bearer <jwt>` header on every non-public request.
- Populate `request.state.principal` (the per-request security context).
- Bind the caller's user id into structlog contextvars.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.status import HTTP_401_UNAUTHORIZED
from starlette.types import ASGIApp

from rbac_platform.observability.logging import get_logger
from rbac_platform.security.jwt import JwtConfig, JwtValidationError, principal_from_token

log = get_logger(__name__)

BEARER_PREFIX = "Bearer "


def bearer_token(header_value: str | None) -> str | None:
    if not header_value or not header_value.startswith(BEARER_PREFIX):
        return None
    return header_value[len(BEARER_PREFIX) :].strip() or None


def is_public_path(path: str, public_paths: Iterable[str]) -> bool:
    # Entries ending in "/" match as prefixes; everything else must match exactly.
    for candidate in public_paths:
        if candidate.endswith("/"):
            if path.startswith(candidate):
                return True
        elif path == candidate:
            return True
    return False


class JwtAuthenticationMiddleware(BaseHTTPMiddleware):
    """
    required=True  -> requests without a bearer token get 401 (product service)
    required=False -> requests without a token continue anonymously (auth service)

    A bearer token that fails verification is always rejected with 401.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        jwt_config: JwtConfig,
        required: bool,
        public_paths: Iterable[str] = (),
    ) -> None:
        super().__init__(app)
        self._cfg = jwt_config
        self._required = required
        self._public_paths = tuple(public_paths)

    async def dispatch(self, request: Request, call_next) -> Response:
        request.state.principal = None
        if is_public_path(request.url.path, self._public_paths):
            return await call_next(request)

        token = bearer_token(request.headers.get("authorization"))
        if token is None:
            if self._required:
                return PlainTextResponse(
                    "Missing or invalid Authorization header", status_code=HTTP_401_UNAUTHORIZED
                )
            return await call_next(request)

        try:
            principal = principal_from_token(cfg=self._cfg, token=token)
        except JwtValidationError as e:
            log.warning("jwt_rejected", reason=str(e))
            return PlainTextResponse("Invalid JWT token", status_code=HTTP_401_UNAUTHORIZED)

        request.state.principal = principal
        structlog.contextvars.bind_contextvars(user_id=principal.user_id)
        return await call_next(request)


# --- Module Notes -----------------------------------------------------------
# Register this middleware before `RequestContextMiddleware` so the request-context
# middleware wraps it and clears contextvars after the response.
