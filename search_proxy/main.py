"""Application entrypoint."""

from __future__ import annotations

import uvicorn

from search_proxy.config import get_settings
from search_proxy.logging import configure_logging, logger
from search_proxy.web import create_app


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    if not settings.api_key():
        logger.warning("tomtom_api_key_missing")

    app = create_app(settings)
    logger.info(
        "search_proxy_starting",
        environment=settings.environment,
        host=settings.host,
        port=settings.port,
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
