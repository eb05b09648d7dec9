"""FastAPI application factory: the GraphQL router plus a health check."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from repo_insights.interface.dependencies import shutdown, startup
from repo_insights.interface.error_handlers import register_error_handlers
from repo_insights.interface.routes import router

logger = logging.getLogger(__name__)

GRAPHQL_PATH = "/graphql"


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Own the shared upstream HTTP client for the lifetime of the app."""
    await startup()
    logger.info("Upstream HTTP client ready")
    try:
        yield
    finally:
        await shutdown()
        logger.info("Upstream HTTP client closed")


def create_app() -> FastAPI:
    """Mount ``listRepositories`` / ``fetchRepositoriesDetails`` under /graphql."""
    app = FastAPI(
        title="Repo Insights",
        version="1.0.0",
        description=(
            "Lists the viewer's GitHub repositories and aggregates, per "
            "repository, visibility, file count, the content of a chosen file "
            "type, and webhooks."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    app.include_router(router, prefix=GRAPHQL_PATH)

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
