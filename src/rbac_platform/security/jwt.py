"""
rbac_platform.security.jwt

JWT issuing and validation helpers.

Responsibilities:
- Issue HMAC-signed tokens carrying identity plus comma-joined role/permission claims.
- Decode and verify tokens (signature, algorithm, expiry when present).
- Convert verified claims into a typed `Principal`.

Claim layout (wire contract shared by all services):
    sub / userId   user id as a string
    email          user email
    fullName       display name
    roles          "ROLE_ADMIN,ROLE_USER"
    permissions    "READ_PRODUCTS,WRITE_PRODUCTS"
    iat / exp      issued-at / expiry (epoch seconds)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from rbac_platform.security.models import Principal
from rbac_platform.settings import Settings

CLAIM_SEPARATOR = ","


@dataclass(frozen=True, slots=True)
class JwtConfig:
    alg: str
    secret: str
    ttl: timedelta = timedelta(hours=24)

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        return cls(alg=settings.jwt_alg, secret=settings.jwt_secret, ttl=settings.jwt_ttl)


class JwtValidationError(Exception):
    pass


def join_claim(values: Iterable[str]) -> str:
    """Join names into a claim string, dropping duplicates but keeping first-seen order."""
    return CLAIM_SEPARATOR.join(dict.fromkeys(v for v in values if v))


def split_claim(raw: Any) -> tuple[str, ...]:
    """Split a comma-joined claim/header into trimmed, non-empty entries."""
    if not raw or not isinstance(raw, str):
        return ()
    return tuple(part.strip() for part in raw.split(CLAIM_SEPARATOR) if part.strip())


def issue_token(
    *,
    cfg: JwtConfig,
    user_id: str | int,
    email: str,
    full_name: str | None,
    roles: Iterable[str],
    permissions: Iterable[str],
    ttl: timedelta | None = None,
) -> str:
    now = datetime.now(tz=UTC)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "userId": str(user_id),
        "email": email,
        "fullName": full_name,
        "roles": join_claim(roles),
        "permissions": join_claim(permissions),
        "iat": int(now.timestamp()),
        "exp": int((now + (ttl or cfg.ttl)).timestamp()),
    }
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


def decode_and_validate(*, cfg: JwtConfig, token: str) -> dict[str, Any]:
    try:
        # Signature + algorithm are always checked; `exp` is enforced when present.
        return jwt.decode(token, cfg.secret, algorithms=[cfg.alg])
    except InvalidTokenError as e:
        raise JwtValidationError(str(e)) from e


def principal_from_claims(claims: dict[str, Any]) -> Principal:
    subject = claims.get("sub") or claims.get("userId")
    if not subject:
        raise JwtValidationError("Token has no subject")
    return Principal(
        user_id=str(subject),
        email=claims.get("email"),
        full_name=claims.get("fullName"),
        roles=split_claim(claims.get("roles")),
        permissions=split_claim(claims.get("permissions")),
    )


def principal_from_token(*, cfg: JwtConfig, token: str) -> Principal:
    return principal_from_claims(decode_and_validate(cfg=cfg, token=token))


# --- Module Notes -----------------------------------------------------------
# Tokens are issued only by `auth_service.services.auth`; every service verifies them
# locally through `security.middleware.JwtAuthenticationMiddleware`.
