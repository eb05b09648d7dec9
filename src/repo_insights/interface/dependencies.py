"""FastAPI dependency injection wiring."""

from __future__ import annotations

import httpx
from fastapi import Depends

from repo_insights.domain.ports.repository_host import RepositoryHost
from repo_insights.infrastructure.config import get_settings
from repo_insights.infrastructure.github_adapter import GitHubAdapter
from repo_insights.services.fetch_repository_details import FetchRepositoryDetailsUseCase
from repo_insights.services.list_repositories import ListRepositoriesUseCase

_http_client: httpx.AsyncClient | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.request_timeout))


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None


def get_repository_host() -> RepositoryHost:
    """Build the GitHub adapter around the shared HTTP client."""
    settings = get_settings()

    assert _http_client is not None, "startup() was not called"

    return GitHubAdapter(
        client=_http_client,
        token=settings.github_token.get_secret_value(),
        graphql_url=settings.github_graphql_url,
        api_url=settings.github_api_url,
        branch=settings.branch,
    )


def get_list_use_case(
    host: RepositoryHost = Depends(get_repository_host),
) -> ListRepositoriesUseCase:
    return ListRepositoriesUseCase(repository_host=host)


def get_details_use_case(
    host: RepositoryHost = Depends(get_repository_host),
) -> FetchRepositoryDetailsUseCase:
    return FetchRepositoryDetailsUseCase(repository_host=host)


async def get_context(
    list_repositories: ListRepositoriesUseCase = Depends(get_list_use_case),
    fetch_details: FetchRepositoryDetailsUseCase = Depends(get_details_use_case),
) -> dict[str, object]:
    """Strawberry ``context_getter``: expose the use cases to resolvers."""
    return {"list_repositories": list_repositories, "fetch_details": fetch_details}
