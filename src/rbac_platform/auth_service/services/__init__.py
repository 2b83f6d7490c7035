"""
rbac_platform.auth_service.services

Service layer (transaction owners) for the auth service.

Responsibilities:
- Registration/login and token issuance.
- Role/permission administration and user-role assignment.
- Initial admin seeding.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services raise `rbac_platform.errors.ServiceError` subclasses; routers and the app-level
# exception handler translate them into HTTP responses.
