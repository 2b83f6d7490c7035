"""
rbac_platform.auth_service.routers

HTTP routers for the auth service.
"""

# Package marker.
