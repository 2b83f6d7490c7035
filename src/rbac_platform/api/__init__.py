"""
rbac_platform.api

Shared API-layer pieces for the services.

Responsibilities:
- Service app composition (middleware, exception handlers, lifespan).
- Dependency wiring for settings and DB sessions.
- Health/readiness router.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: request validation + auth + delegation to services.
