"""Process entry point: configure logging and serve the API with uvicorn."""

from __future__ import annotations

import logging

import uvicorn

from repo_insights.infrastructure.config import Settings, get_settings
from repo_insights.interface.app import GRAPHQL_PATH

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)
    # httpx logs every request at INFO; the adapter already logs them at DEBUG
    logging.getLogger("httpx").setLevel(logging.WARNING)


def main() -> None:
    """Start the uvicorn ASGI server."""
    settings = get_settings()
    configure_logging(settings)
    logger.info(
        "Serving GraphQL at http://%s:%d%s (branch %s)",
        settings.host,
        settings.port,
        GRAPHQL_PATH,
        settings.branch,
    )
    uvicorn.run(
        "repo_insights.interface.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
