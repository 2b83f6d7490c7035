"""
rbac_platform.product_service.__main__

Entrypoint for running the product service via `python -m rbac_platform.product_service`.
"""

from __future__ import annotations

import uvicorn

from rbac_platform.product_service.app import create_app
from rbac_platform.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.product_api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()


# --- Module Notes -----------------------------------------------------------
# Run with the same RBAC_JWT_SECRET as the auth service or every token is rejected.
