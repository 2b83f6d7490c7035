"""
rbac_platform.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide declarative bases/mixins, engine/session setup and table bootstrap.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Each service owns its own declarative base and database; this package only holds
# the pieces they share.
