"""
rbac_platform.product_service.routers

HTTP routers for the product service.
"""

# Package marker.
