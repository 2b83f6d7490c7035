"""
rbac_platform.auth_service.models

Persistence schema for identities and access control.

Responsibilities:
- Define ORM models for the RBAC graph:
  - User: credentials, account flags, assigned roles
  - Role: named bundle of permissions
  - Permission: a (resource, action) capability with a unique name
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, ForeignKey, String, Table
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from rbac_platform.db.base import TimestampMixin


class AuthBase(DeclarativeBase):
    pass


user_roles = Table(
    "user_roles",
    AuthBase.metadata,
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)

role_permissions = Table(
    "role_permissions",
    AuthBase.metadata,
    Column("role_id", ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
    Column("permission_id", ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True),
)


class Permission(TimestampMixin, AuthBase):
    __tablename__ = "permissions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    # e.g. READ_PRODUCTS, ASSIGN_ROLES
    name: Mapped[str] = mapped_column(String(128), unique=True, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    # e.g. PRODUCT, USER, ROLE
    resource: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    # e.g. READ, WRITE, DELETE
    action: Mapped[str] = mapped_column(String(64), nullable=False)


class Role(TimestampMixin, AuthBase):
    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), unique=True, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    active: Mapped[bool] = mapped_column(nullable=False, default=True)

    # Always needed to build token claims; selectin keeps access async-safe.
    permissions: Mapped[list[Permission]] = relationship(
        secondary=role_permissions, lazy="selectin", order_by=Permission.id
    )


class User(TimestampMixin, AuthBase):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    enabled: Mapped[bool] = mapped_column(nullable=False, default=True)
    locked: Mapped[bool] = mapped_column(nullable=False, default=False)
    last_login_at: Mapped[datetime | None] = mapped_column(nullable=True)

    roles: Mapped[list[Role]] = relationship(
        secondary=user_roles, lazy="selectin", order_by=Role.id
    )

    @property
    def role_names(self) -> list[str]:
        return [r.name for r in self.roles]

    @property
    def permission_names(self) -> list[str]:
        # Flattened across roles, first occurrence wins.
        return list(dict.fromkeys(p.name for r in self.roles for p in r.permissions))


# --- Module Notes -----------------------------------------------------------
# Role -> users is not mapped as a relationship; "is this role assigned?" is a count
# query in `repositories.roles` so deletes never load every user.
