"""Port: repository host — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from repo_insights.domain.entities import RepositorySummary, RepositoryTree, Webhook


class RepositoryHost(Protocol):
    """Abstract contract for reading repository data from the hosting service."""

    async def list_repositories(self) -> list[RepositorySummary]:
        """Return one page of the viewer's repositories."""
        ...

    async def fetch_tree(self, repo_name: str) -> RepositoryTree:
        """Return metadata and the shallow root tree of the pinned branch."""
        ...

    async def fetch_file_content(self, repo_name: str, path: str) -> str | None:
        """Return the text of the blob at *path*, or ``None`` if it is not a blob."""
        ...

    async def fetch_active_webhooks(self, owner: str, repo_name: str) -> list[Webhook]:
        """Return the webhooks configured on ``owner/repo_name``."""
        ...
