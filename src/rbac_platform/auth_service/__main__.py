"""
rbac_platform.auth_service.__main__

Entrypoint for running the auth service via `python -m rbac_platform.auth_service`.
"""

from __future__ import annotations

import uvicorn

from rbac_platform.auth_service.app import create_app
from rbac_platform.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.auth_api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
