"""FastAPI dependency injection wiring."""

from __future__ import annotations

from typing import Any, Callable

import httpx
from fastapi import Depends

from repo_inspector.domain.ports.repo_host import RepoHost
from repo_inspector.domain.value_objects import Credential
from repo_inspector.infrastructure.config import get_settings
from repo_inspector.infrastructure.github_rest_adapter import GitHubRestAdapter

HostFactory = Callable[[Credential], RepoHost]

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


def get_http_client() -> httpx.AsyncClient:
    assert _http_client is not None, "startup() was not called"
    return _http_client


def get_host_factory(
    client: httpx.AsyncClient = Depends(get_http_client),
) -> HostFactory:
    """Return a callable binding a request credential to a fresh adapter."""
    settings = get_settings()

    def factory(credential: Credential) -> RepoHost:
        return GitHubRestAdapter(
            client=client,
            credential=credential,
            api_url=settings.github_api_url,
            user_agent=settings.user_agent,
        )

    return factory


async def get_context(
    host_factory: HostFactory = Depends(get_host_factory),
) -> dict[str, Any]:
    """GraphQL context for one request."""
    return {"host_factory": host_factory}
