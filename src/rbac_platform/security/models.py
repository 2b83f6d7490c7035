"""
rbac_platform.security.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Principal`) decoded from a JWT.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity, as carried in the token claims.
    """

    user_id: str
    email: str | None
    full_name: str | None
    roles: tuple[str, ...] = ()
    permissions: tuple[str, ...] = ()

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions

    def has_role(self, role: str) -> bool:
        return role in self.roles

    def describe(self) -> str:
        return (
            f"User Info - ID: {self.user_id}, Email: {self.email}, Name: {self.full_name}, "
            f"Roles: {', '.join(self.roles)}, Permissions: {', '.join(self.permissions)}"
        )


def describe_principal(principal: Principal | None) -> str:
    # Plain-text summary served by both services' /user-info endpoints.
    if principal is None:
        return "User Info - Not authenticated"
    return principal.describe()


# --- Module Notes -----------------------------------------------------------
# Keep this model minimal; it is shared by middleware, the permission gate and
# the audit-field population in `db.base`.
