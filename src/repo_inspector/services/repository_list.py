"""Repository-list use case."""

from __future__ import annotations

import logging

from repo_inspector.domain.entities import RepositorySummary
from repo_inspector.domain.exceptions import AggregationFailedError, RepoInspectorError
from repo_inspector.domain.ports.repo_host import RepoHost

logger = logging.getLogger(__name__)


class RepositoryListService:
    """Projects the caller's repositories into summaries, keeping host order."""

    def __init__(self, host: RepoHost) -> None:
        self._host = host

    async def list_repositories(self) -> list[RepositorySummary]:
        try:
            repos = await self._host.list_user_repositories()
        except RepoInspectorError as exc:
            raise AggregationFailedError("listRepositories", exc) from exc
        logger.info("Listed %d repositories", len(repos))
        return [RepositorySummary.from_host(repo) for repo in repos]
