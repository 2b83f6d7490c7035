"""
rbac_platform.auth_service.services.seed

Initial data for a fresh auth database.

Responsibilities:
- Create the built-in permission catalog (user, role, permission and product management).
- Create ROLE_ADMIN holding every permission.
- Create the admin user from settings.

Every step is idempotent; a second run only reports that the admin already exists.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rbac_platform.auth_service.repositories.permissions import PermissionRepo
from rbac_platform.auth_service.repositories.roles import RoleRepo
from rbac_platform.auth_service.repositories.users import UserRepo
from rbac_platform.auth_service.services.auth import normalize_email
from rbac_platform.db.session import conflict_on_duplicate
from rbac_platform.errors import NotFoundError
from rbac_platform.observability.logging import get_logger
from rbac_platform.security.passwords import hash_password
from rbac_platform.settings import Settings

log = get_logger(__name__)

ADMIN_ROLE = "ROLE_ADMIN"

# (name, description, resource, action)
BUILTIN_PERMISSIONS: tuple[tuple[str, str, str, str], ...] = (
    ("CREATE_USER", "Create new users", "USER", "CREATE"),
    ("READ_USER", "View user details", "USER", "READ"),
    ("UPDATE_USER", "Update user information", "USER", "UPDATE"),
    ("DELETE_USER", "Delete users", "USER", "DELETE"),
    ("ASSIGN_ROLES", "Assign roles to users", "USER", "ASSIGN_ROLES"),
    ("CREATE_ROLE", "Create new roles", "ROLE", "CREATE"),
    ("READ_ROLE", "View role details", "ROLE", "READ"),
    ("UPDATE_ROLE", "Update role information", "ROLE", "UPDATE"),
    ("DELETE_ROLE", "Delete roles", "ROLE", "DELETE"),
    ("ASSIGN_PERMISSIONS", "Assign permissions to roles", "ROLE", "ASSIGN_PERMISSIONS"),
    ("CREATE_PERMISSION", "Create new permissions", "PERMISSION", "CREATE"),
    ("READ_PERMISSION", "View permission details", "PERMISSION", "READ"),
    ("UPDATE_PERMISSION", "Update permission information", "PERMISSION", "UPDATE"),
    ("DELETE_PERMISSION", "Delete permissions", "PERMISSION", "DELETE"),
    ("READ_PRODUCTS", "View products", "PRODUCT", "READ"),
    ("WRITE_PRODUCTS", "Create or update products", "PRODUCT", "WRITE"),
    ("DELETE_PRODUCTS", "Delete products", "PRODUCT", "DELETE"),
)


@dataclass(frozen=True, slots=True)
class SeedResult:
    created: bool
    message: str


class DataInitializer:
    def __init__(self, *, session: AsyncSession, settings: Settings) -> None:
        self._session = session
        self._settings = settings
        self._permissions = PermissionRepo(session)
        self._roles = RoleRepo(session)
        self._users = UserRepo(session)

    async def initialize(self) -> SeedResult:
        admin_email = normalize_email(self._settings.admin_email)
        if await self._users.exists_by_email(admin_email):
            log.info("seed_skipped", reason="admin_exists")
            return SeedResult(created=False, message="Data already initialized. Admin user exists.")

        log.info("seed_started")
        async with conflict_on_duplicate(self._session, "Data initialization already in progress"):
            await self._create_permissions()
            await self._create_admin_role()
            await self._create_admin_user(admin_email)
            await self._session.commit()
        log.info("seed_completed", admin_email=admin_email)
        log.warning("seed_default_admin_password", hint="change the admin password after first login")
        return SeedResult(
            created=True,
            message=f"Data initialization completed successfully! Admin email: {admin_email}",
        )

    async def _create_permissions(self) -> None:
        for name, description, resource, action in BUILTIN_PERMISSIONS:
            if await self._permissions.exists_by_name(name):
                log.debug("seed_permission_exists", permission=name)
                continue
            await self._permissions.create(
                name=name, description=description, resource=resource, action=action
            )
            log.info("seed_permission_created", permission=name)

    async def _create_admin_role(self) -> None:
        if await self._roles.exists_by_name(ADMIN_ROLE):
            log.debug("seed_role_exists", role=ADMIN_ROLE)
            return
        permissions = await self._permissions.list_all()
        await self._roles.create(
            name=ADMIN_ROLE,
            description="Administrator role with full access to all resources",
            permissions=permissions,
        )
        log.info("seed_role_created", role=ADMIN_ROLE, permissions=len(permissions))

    async def _create_admin_user(self, admin_email: str) -> None:
        role = await self._roles.get_by_name(ADMIN_ROLE)
        if role is None:
            raise NotFoundError("ADMIN role not found")
        await self._users.create(
            email=admin_email,
            password_hash=hash_password(
                self._settings.admin_password, rounds=self._settings.bcrypt_rounds
            ),
            full_name=self._settings.admin_full_name,
            roles=[role],
        )


async def seed_on_startup(
    session_factory: async_sessionmaker[AsyncSession], settings: Settings
) -> SeedResult:
    async with session_factory() as session:
        return await DataInitializer(session=session, settings=settings).initialize()
