"""List-repositories use case."""

from __future__ import annotations

import logging

from repo_insights.domain.entities import RepositorySummary
from repo_insights.domain.ports.repository_host import RepositoryHost

logger = logging.getLogger(__name__)


class ListRepositoriesUseCase:
    """Return the first page of the viewer's repositories."""

    def __init__(self, repository_host: RepositoryHost) -> None:
        self._host = repository_host

    async def execute(self) -> list[RepositorySummary]:
        repositories = await self._host.list_repositories()
        logger.info("Listed %d repositories", len(repositories))
        return repositories
