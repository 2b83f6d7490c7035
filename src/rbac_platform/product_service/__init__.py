"""
rbac_platform.product_service

Product catalog service.

Responsibilities:
- Product CRUD gated by READ_PRODUCTS / WRITE_PRODUCTS / DELETE_PRODUCTS.
- Local JWT verification; no calls back to the auth service.
"""

# Package marker.
