"""Fetch-repository-details use case: the aggregation pipeline.

For every requested repository it fetches the shallow tree, analyses it
locally, then fetches the webhooks and the content of the first file of the
requested type, and merges everything into one :class:`RepositoryDetails`.

All chains are started up front and harvested in input order, two at a
time. The first failure fails the whole call; there is no partial result.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from repo_insights.domain.entities import RepositoryDetails
from repo_insights.domain.ports.repository_host import RepositoryHost
from repo_insights.services.tree_analyzer import count_files, find_first_path_of_type

logger = logging.getLogger(__name__)

BATCH_WIDTH = 2


class FetchRepositoryDetailsUseCase:
    """Orchestrates the per-repository fan-out.

    Parameters
    ----------
    repository_host:
        Adapter that can read trees, blobs and webhooks from GitHub.
    batch_width:
        How many results are awaited together while harvesting.
    """

    def __init__(self, repository_host: RepositoryHost, batch_width: int = BATCH_WIDTH) -> None:
        self._host = repository_host
        self._batch_width = batch_width

    # ── Public entry point ──────────────────────────────────────────────

    async def execute(
        self,
        repo_names: Sequence[str],
        file_type: str | None,
        owner: str,
    ) -> list[RepositoryDetails]:
        """Return one record per name, in the order the names were given."""
        if not repo_names:
            return []

        logger.info(
            "Fetching details for %d repositories (owner=%s, file_type=%s)",
            len(repo_names),
            owner,
            file_type,
        )
        tasks = [
            asyncio.ensure_future(self._assemble(name, file_type, owner))
            for name in repo_names
        ]
        for task in tasks:
            task.add_done_callback(_drain)

        results: list[RepositoryDetails] = []
        for start in range(0, len(tasks), self._batch_width):
            batch = tasks[start : start + self._batch_width]
            results.extend(await asyncio.gather(*batch))
        return results

    # ── Single repository ───────────────────────────────────────────────

    async def _assemble(
        self, repo_name: str, file_type: str | None, owner: str
    ) -> RepositoryDetails:
        tree = await self._host.fetch_tree(repo_name)

        entries = tree.entries
        if entries is None:
            logger.warning(
                "Pinned branch does not resolve for %s/%s; reporting 0 files",
                tree.owner,
                tree.name,
            )
            entries = ()
        number_of_files = count_files(entries)
        file_path = find_first_path_of_type(entries, file_type)

        # Webhooks are looked up under the caller's owner, not tree.owner.
        webhooks = await self._host.fetch_active_webhooks(owner, repo_name)
        file_content = await self._host.fetch_file_content(repo_name, file_path or "")

        logger.debug(
            "%s: %d files, first .%s file=%s, %d webhooks",
            repo_name,
            number_of_files,
            file_type,
            file_path,
            len(webhooks),
        )
        return RepositoryDetails(
            name=tree.name,
            owner=tree.owner,
            visibility=tree.visibility,
            size=tree.size,
            number_of_files=number_of_files,
            file_content=file_content,
            active_webhooks=webhooks,
        )


def _drain(task: asyncio.Future[RepositoryDetails]) -> None:
    """Consume the outcome of chains abandoned after a sibling failed."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug("Repository chain finished with %s: %s", type(exc).__name__, exc)
