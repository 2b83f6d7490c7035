"""
rbac_platform.settings

Central configuration model (Pydantic Settings) shared by both services.

Responsibilities:
- Provide strongly-typed, env-driven settings for the auth and product services.
- Hide secrets from repr/logging (JWT secret, seeded admin password).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rbac_platform.security.passwords import MAX_PASSWORD_BYTES


class Settings(BaseSettings):
    """
    One settings object per process. Each service reads the fields it needs;
    the JWT block must be identical across services so tokens verify everywhere.
    """

    model_config = SettingsConfigDict(env_prefix="RBAC_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "rbac-platform"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    auth_api_port: int = 8081
    product_api_port: int = 8082

    # Auth
    jwt_alg: str = "HS256"
    jwt_secret: str = Field(
        default="dev-secret-change-me-please-32-bytes-min", repr=False, min_length=32
    )
    jwt_ttl_minutes: int = Field(default=24 * 60, ge=1)
    # Accept X-User-Permissions / X-User-Email set by an upstream proxy when no
    # bearer principal is present. Only safe behind a proxy that strips client-sent
    # X-User-* headers.
    trust_gateway_headers: bool = False
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # Persistence (one database per service)
    auth_database_url: str = "sqlite+aiosqlite:///./auth.db"
    product_database_url: str = "sqlite+aiosqlite:///./product.db"

    # Initial admin created by POST /init/admin
    admin_email: str = "admin@example.com"
    admin_password: str = Field(default="admin123", repr=False)
    admin_full_name: str = "System Administrator"
    # Run the admin initializer at startup instead of waiting for POST /init/admin.
    seed_admin_on_startup: bool = False

    @field_validator("admin_password")
    @classmethod
    def admin_password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"admin_password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value

    @property
    def jwt_ttl(self) -> timedelta:
        return timedelta(minutes=self.jwt_ttl_minutes)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Apps receive Settings explicitly through `create_app(settings=...)` and stash it on
# app.state, so tests can build isolated apps without touching the cached instance.
