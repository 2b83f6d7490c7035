"""
rbac_platform.auth_service.services.auth

Account lifecycle service.

Responsibilities:
- Register users (default role assignment) and authenticate logins.
- Encode role/permission claims and issue JWTs.
- Change passwords; manage users and their role assignments.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rbac_platform.auth_service.models import Role, User
from rbac_platform.auth_service.repositories.roles import RoleRepo
from rbac_platform.auth_service.repositories.users import UserRepo
from rbac_platform.db.base import utcnow
from rbac_platform.db.session import conflict_on_duplicate
from rbac_platform.errors import AuthenticationFailed, ConflictError, NotFoundError, ServiceError
from rbac_platform.observability.logging import get_logger
from rbac_platform.security.jwt import JwtConfig, issue_token, join_claim
from rbac_platform.security.passwords import hash_password, verify_password
from rbac_platform.settings import Settings

log = get_logger(__name__)

DEFAULT_ROLE = "ROLE_USER"


@dataclass(frozen=True, slots=True)
class IssuedToken:
    token: str
    email: str
    full_name: str | None
    roles: str
    permissions: str


def normalize_email(email: str) -> str:
    return email.strip().lower()


def roles_claim(user: User) -> str:
    return join_claim(user.role_names)


def permissions_claim(user: User) -> str:
    return join_claim(user.permission_names)


class AuthService:
    def __init__(self, *, session: AsyncSession, settings: Settings) -> None:
        self._session = session
        self._settings = settings
        self._jwt = JwtConfig.from_settings(settings)

        self._users = UserRepo(session)
        self._roles = RoleRepo(session)

    def _issue(self, user: User) -> IssuedToken:
        roles = roles_claim(user)
        permissions = permissions_claim(user)
        token = issue_token(
            cfg=self._jwt,
            user_id=user.id,
            email=user.email,
            full_name=user.full_name,
            roles=user.role_names,
            permissions=user.permission_names,
        )
        return IssuedToken(
            token=token,
            email=user.email,
            full_name=user.full_name,
            roles=roles,
            permissions=permissions,
        )

    def _hash(self, password: str) -> str:
        return hash_password(password, rounds=self._settings.bcrypt_rounds)

    async def _default_role(self) -> Role:
        role = await self._roles.get_by_name(DEFAULT_ROLE)
        if role is not None:
            return role
        try:
            role = await self._roles.create(
                name=DEFAULT_ROLE, description="Default user role", permissions=[]
            )
            await self._session.commit()
        except IntegrityError:
            # Another request created it first; use that row.
            await self._session.rollback()
            role = await self._roles.get_by_name(DEFAULT_ROLE)
            if role is None:
                raise
            return role
        log.info("default_role_created", role=DEFAULT_ROLE)
        return role

    async def register(self, *, email: str, password: str, full_name: str | None) -> IssuedToken:
        email = normalize_email(email)
        if await self._users.exists_by_email(email):
            raise ConflictError("Email already registered")

        roles = [await self._default_role()]
        async with conflict_on_duplicate(self._session, "Email already registered"):
            user = await self._users.create(
                email=email,
                password_hash=self._hash(password),
                full_name=full_name,
                roles=roles,
            )
            await self._session.commit()
        log.info("user_registered", user_id=user.id)
        return self._issue(user)

    async def login(self, *, email: str, password: str) -> IssuedToken:
        user = await self._users.get_by_email(normalize_email(email))
        if user is None or not verify_password(password, user.password_hash):
            log.info("login_failed", reason="bad_credentials")
            raise AuthenticationFailed("Invalid email or password")
        if not user.enabled:
            log.info("login_failed", reason="disabled", user_id=user.id)
            raise AuthenticationFailed("Account is disabled")
        if user.locked:
            log.info("login_failed", reason="locked", user_id=user.id)
            raise AuthenticationFailed("Account is locked")

        user.last_login_at = utcnow()
        await self._session.commit()
        log.info("login_succeeded", user_id=user.id)
        return self._issue(user)

    async def change_password(
        self, *, email: str, current_password: str, new_password: str
    ) -> None:
        user = await self._users.get_by_email(normalize_email(email))
        if user is None:
            raise NotFoundError("User not found")
        if not verify_password(current_password, user.password_hash):
            raise ServiceError("Current password is incorrect")

        user.password_hash = self._hash(new_password)
        await self._session.commit()
        log.info("password_changed", user_id=user.id)

    # --- user administration -------------------------------------------------

    async def get_user(self, user_id: int) -> User:
        user = await self._users.get(user_id)
        if user is None:
            raise NotFoundError(f"User not found with id: {user_id}")
        return user

    async def list_users(self) -> list[User]:
        return await self._users.list_all()

    async def create_user(
        self,
        *,
        email: str,
        password: str,
        full_name: str | None,
        role_ids: set[int],
    ) -> User:
        email = normalize_email(email)
        if await self._users.exists_by_email(email):
            raise ConflictError("Email already registered")
        roles = await self._resolve_roles(role_ids) if role_ids else [await self._default_role()]
        async with conflict_on_duplicate(self._session, "Email already registered"):
            user = await self._users.create(
                email=email, password_hash=self._hash(password), full_name=full_name, roles=roles
            )
            await self._session.commit()
        return user

    async def update_user(
        self,
        user_id: int,
        *,
        full_name: str | None = None,
        enabled: bool | None = None,
        locked: bool | None = None,
    ) -> User:
        user = await self.get_user(user_id)
        if full_name is not None:
            user.full_name = full_name
        if enabled is not None:
            user.enabled = enabled
        if locked is not None:
            user.locked = locked
        await self._session.commit()
        return user

    async def delete_user(self, user_id: int) -> None:
        user = await self.get_user(user_id)
        await self._users.delete(user)
        await self._session.commit()

    async def _resolve_roles(self, role_ids: set[int]) -> list[Role]:
        roles = await self._roles.list_by_ids(role_ids)
        missing = sorted(set(role_ids) - {r.id for r in roles})
        if missing:
            raise NotFoundError(f"Role not found: {missing[0]}")
        return roles

    async def assign_roles(self, user_id: int, role_ids: set[int]) -> User:
        user = await self.get_user(user_id)
        current = {r.id for r in user.roles}
        for role in await self._resolve_roles(role_ids):
            if role.id not in current:
                user.roles.append(role)
        await self._session.commit()
        log.info("roles_assigned", user_id=user_id, role_ids=sorted(role_ids))
        return user

    async def remove_roles(self, user_id: int, role_ids: set[int]) -> User:
        user = await self.get_user(user_id)
        user.roles = [r for r in user.roles if r.id not in role_ids]
        await self._session.commit()
        log.info("roles_removed", user_id=user_id, role_ids=sorted(role_ids))
        return user
