"""
rbac_platform.auth_service.repositories

Repository package.

Responsibilities:
- Group data-access repositories for users, roles and permissions.
"""

# Package marker; repositories are imported directly from submodules.


# --- Module Notes -----------------------------------------------------------
# Repositories only query and persist; duplicate checks and business rules belong in services.
