"""
rbac_platform.security

Authentication/authorization package shared by every service.

Responsibilities:
- JWT issuing/validation and claim encoding.
- Authentication middleware that turns a bearer token into a `Principal`.
- FastAPI dependencies for the per-endpoint permission gate.
- Password hashing.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services must share `jwt_secret`/`jwt_alg`; nothing here talks to a database.
