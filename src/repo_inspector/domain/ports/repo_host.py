"""Port: repository host — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from repo_inspector.domain.entities import FileTreeEntry, HostRepository, Webhook
from repo_inspector.domain.value_objects import RepoRef


class RepoHost(Protocol):
    """Authenticated, stateless reads against the repository host.

    Every method raises a :class:`~repo_inspector.domain.exceptions.HostError`
    subclass on failure and never retries.
    """

    async def list_user_repositories(self) -> list[HostRepository]:
        """Return the repositories of the authenticated user, newest first."""
        ...

    async def get_repository(self, ref: RepoRef) -> HostRepository:
        """Return metadata for a single repository."""
        ...

    async def list_directory(self, ref: RepoRef, path: str = "") -> list[FileTreeEntry]:
        """Return the entries of one directory; ``""`` is the repository root."""
        ...

    async def get_raw_content(self, url: str) -> str:
        """Return the text behind a pre-authorised download URL."""
        ...

    async def list_webhooks(self, ref: RepoRef) -> list[Webhook]:
        """Return the configured webhooks in host order."""
        ...
