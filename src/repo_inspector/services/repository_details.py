"""Repository-details use case — aggregates several host calls into one record.

Metadata, the root listing and the webhook list do not depend on each other
and are fetched concurrently.  The YAML search and the follow-up content
download run afterwards.  Any host failure aborts the aggregation; a missing
YAML file does not.
"""

from __future__ import annotations

import asyncio
import logging

from repo_inspector.domain.entities import FileTreeEntry, RepositoryDetail
from repo_inspector.domain.exceptions import (
    AggregationFailedError,
    HostMalformedResponseError,
    RepoInspectorError,
)
from repo_inspector.domain.ports.repo_host import RepoHost
from repo_inspector.domain.value_objects import RepoRef
from repo_inspector.services.yaml_locator import find_yaml

logger = logging.getLogger(__name__)


class RepositoryDetailsService:
    """Builds a :class:`RepositoryDetail` for one repository.

    Parameters
    ----------
    host:
        Adapter bound to the caller's credential.
    """

    def __init__(self, host: RepoHost) -> None:
        self._host = host

    async def get_details(self, ref: RepoRef) -> RepositoryDetail:
        """Run every step and assemble the record, or fail as a whole."""
        logger.info("Aggregating details for %s", ref.full_name)
        try:
            return await self._aggregate(ref)
        except RepoInspectorError as exc:
            logger.info("Details for %s failed: %s", ref.full_name, exc.kind)
            raise AggregationFailedError(
                f"getRepositoryDetails({ref.full_name})", exc
            ) from exc

    async def _aggregate(self, ref: RepoRef) -> RepositoryDetail:
        tasks = [
            asyncio.ensure_future(self._host.get_repository(ref)),
            asyncio.ensure_future(self._host.list_directory(ref)),
            asyncio.ensure_future(self._host.list_webhooks(ref)),
        ]
        try:
            repo, root_entries, webhooks = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            raise

        yml_file = await find_yaml(self._host, ref)
        yml_content = await self._read_yaml(yml_file) if yml_file else ""

        return RepositoryDetail(
            name=repo.name,
            size=repo.size,
            owner=repo.owner,
            is_private=repo.is_private,
            number_of_files=len(root_entries),
            yml_content=yml_content,
            # Hooks without a target URL (non-HTTP services) are left out.
            active_webhooks=tuple(
                hook.target_url for hook in webhooks if hook.target_url is not None
            ),
            forked_from=repo.parent_full_name,
        )

    async def _read_yaml(self, entry: FileTreeEntry) -> str:
        # A found file whose content cannot be read fails the aggregation.
        if not entry.download_url:
            raise HostMalformedResponseError(f"No download URL for {entry.path}")
        logger.debug("Reading YAML content from %s", entry.path)
        return await self._host.get_raw_content(entry.download_url)
