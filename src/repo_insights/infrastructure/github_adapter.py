"""GitHub GraphQL + REST adapter — implements the RepositoryHost port."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from repo_insights.domain.entities import RepositorySummary, RepositoryTree, Webhook
from repo_insights.domain.exceptions import (
    MalformedDataError,
    RepositoryNotFoundError,
    UpstreamAccessDeniedError,
    UpstreamAuthenticationError,
    UpstreamRateLimitError,
    UpstreamResponseError,
    UpstreamTransportError,
)
from repo_insights.infrastructure import github_queries as queries
from repo_insights.infrastructure.github_payloads import (
    BlobDataPayload,
    RepositoriesDataPayload,
    TreeDataPayload,
    WebhookPayload,
)

logger = logging.getLogger(__name__)

_PayloadT = TypeVar("_PayloadT", bound=BaseModel)
_WEBHOOK_LIST = TypeAdapter(list[WebhookPayload])


class GitHubAdapter:
    """Concrete RepositoryHost backed by the GitHub v4 GraphQL and v3 REST APIs.

    Every public method performs exactly one HTTP round trip. Nothing is
    retried or cached; failures surface as domain exceptions.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str,
        *,
        graphql_url: str,
        api_url: str,
        branch: str,
    ) -> None:
        self._client = client
        self._graphql_url = graphql_url
        self._api_url = api_url.rstrip("/")
        self._branch = branch
        self._headers: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "User-Agent": "repo-insights/1.0",
        }

    async def list_repositories(self) -> list[RepositorySummary]:
        """viewer.repositories(last: 100) → [RepositorySummary]."""
        data = await self._graphql(
            queries.LIST_REPOSITORIES,
            {"last": queries.REPOSITORY_PAGE_SIZE},
            RepositoriesDataPayload,
        )
        nodes = [node for node in data.viewer.repositories.nodes if node is not None]
        return [node.to_entity() for node in nodes[: queries.REPOSITORY_PAGE_SIZE]]

    async def fetch_tree(self, repo_name: str) -> RepositoryTree:
        """viewer.repository(name).object("<branch>:") → RepositoryTree."""
        data = await self._graphql(
            queries.REPOSITORY_TREE,
            {"name": repo_name, "expression": f"{self._branch}:"},
            TreeDataPayload,
        )
        repository = data.viewer.repository
        if repository is None:
            raise RepositoryNotFoundError(f"Repository '{repo_name}' not found for the viewer.")
        return repository.to_entity()

    async def fetch_file_content(self, repo_name: str, path: str) -> str | None:
        """viewer.repository(name).object("<branch>:<path>").text, if a blob."""
        data = await self._graphql(
            queries.BLOB_TEXT,
            {"name": repo_name, "expression": f"{self._branch}:{path}"},
            BlobDataPayload,
        )
        repository = data.viewer.repository
        if repository is None:
            raise RepositoryNotFoundError(f"Repository '{repo_name}' not found for the viewer.")
        if repository.object is None:
            return None
        return repository.object.text

    async def fetch_active_webhooks(self, owner: str, repo_name: str) -> list[Webhook]:
        """GET /repos/{owner}/{repo}/hooks → [Webhook]."""
        url = f"{self._api_url}/repos/{owner}/{repo_name}/hooks"
        logger.debug("GET %s", url)
        try:
            resp = await self._client.get(url, headers=self._headers)
        except httpx.HTTPError as exc:
            raise UpstreamTransportError(f"Network error fetching {url}: {exc}") from exc

        _raise_for_status(resp, url)
        try:
            hooks = _WEBHOOK_LIST.validate_python(_json(resp, url))
        except ValidationError as exc:
            raise MalformedDataError(
                f"Unexpected webhook payload for {owner}/{repo_name}: {exc}"
            ) from exc
        return [hook.to_entity() for hook in hooks]

    async def _graphql(
        self,
        query: str,
        variables: dict[str, Any],
        payload_type: type[_PayloadT],
    ) -> _PayloadT:
        """POST a GraphQL document and validate ``data`` against *payload_type*."""
        logger.debug("POST %s variables=%s", self._graphql_url, variables)
        try:
            resp = await self._client.post(
                self._graphql_url,
                headers=self._headers,
                json={"query": query, "variables": variables},
            )
        except httpx.HTTPError as exc:
            raise UpstreamTransportError(
                f"Network error fetching {self._graphql_url}: {exc}"
            ) from exc

        _raise_for_status(resp, self._graphql_url)
        body = _json(resp, self._graphql_url)
        if not isinstance(body, dict):
            raise MalformedDataError("GitHub GraphQL API returned a non-object body.")

        errors = body.get("errors")
        if errors:
            _raise_graphql_errors(errors)

        try:
            return payload_type.model_validate(body.get("data"))
        except ValidationError as exc:
            raise MalformedDataError(
                f"Unexpected GraphQL payload ({payload_type.__name__}): {exc}"
            ) from exc


# ── Error translation ───────────────────────────────────────────────────────


def _json(resp: httpx.Response, url: str) -> Any:
    try:
        return resp.json()
    except ValueError as exc:
        raise MalformedDataError(f"Non-JSON response from {url}") from exc


def _raise_for_status(resp: httpx.Response, url: str) -> None:
    """Translate non-200 responses into domain exceptions."""
    if resp.status_code == 200:
        return

    if resp.status_code == 401:
        raise UpstreamAuthenticationError(
            "GitHub rejected the token. Check the GITHUB_TOKEN environment variable."
        )

    if resp.status_code == 403:
        remaining = resp.headers.get("x-ratelimit-remaining", "")
        if remaining == "0":
            reset_raw = resp.headers.get("x-ratelimit-reset", "")
            try:
                reset_str = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
                    "%Y-%m-%d %H:%M:%S UTC"
                )
            except (ValueError, OSError):
                reset_str = reset_raw or "unknown"
            raise UpstreamRateLimitError(
                f"GitHub API rate limit exceeded. Resets at {reset_str}."
            )
        raise UpstreamAccessDeniedError(f"Access denied for {url}.")

    if resp.status_code == 404:
        raise RepositoryNotFoundError(f"Not found: {url}")

    if resp.status_code == 429:
        raise UpstreamRateLimitError("GitHub API rate limit exceeded (HTTP 429).")

    raise UpstreamResponseError(f"GitHub API returned HTTP {resp.status_code} for {url}")


def _raise_graphql_errors(errors: Any) -> None:
    """Raise for a GraphQL ``errors`` array delivered with HTTP 200."""
    if not isinstance(errors, list):
        raise MalformedDataError("GitHub GraphQL API returned a malformed 'errors' field.")

    messages = [str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors]
    kinds = {e.get("type") for e in errors if isinstance(e, dict)}
    detail = "; ".join(messages)

    if "NOT_FOUND" in kinds:
        raise RepositoryNotFoundError(detail)
    if "RATE_LIMITED" in kinds:
        raise UpstreamRateLimitError(detail)
    raise UpstreamResponseError(f"GitHub GraphQL API error: {detail}")
