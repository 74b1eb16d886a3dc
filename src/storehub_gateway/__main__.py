"""Run the gateway: ``python -m storehub_gateway``."""

from __future__ import annotations

import uvicorn

from storehub_core.observability import setup_logging

from .app import create_app
from .config import GatewaySettings


def main() -> None:
    settings = GatewaySettings()
    setup_logging(settings.log_level, settings.log_format)
    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        timeout_graceful_shutdown=settings.server.shutdown_timeout,
        log_config=None,
    )


if __name__ == "__main__":
    main()
