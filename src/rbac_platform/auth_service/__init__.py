"""
rbac_platform.auth_service

Authentication service: registration/login, JWT issuance and RBAC administration.

Responsibilities:
- Own the users/roles/permissions database.
- Issue tokens whose claims every other service trusts.
"""

# Package marker.
