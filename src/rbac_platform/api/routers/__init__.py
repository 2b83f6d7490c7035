"""
rbac_platform.api.routers

Routers mounted by every service.
"""

# Package marker.
