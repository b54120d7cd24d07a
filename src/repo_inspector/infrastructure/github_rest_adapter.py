"""GitHub REST API adapter — implements the RepoHost port."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Literal
from urllib.parse import quote

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from repo_inspector.domain.entities import (
    EntryType,
    FileTreeEntry,
    HostRepository,
    Webhook,
)
from repo_inspector.domain.exceptions import (
    HostMalformedResponseError,
    HostRejectedError,
    HostUnavailableError,
)
from repo_inspector.domain.value_objects import Credential, RepoRef

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"
_USER_AGENT = "repo-inspector/1.0"


# ── Wire payloads ───────────────────────────────────────────────────────────


class _OwnerPayload(BaseModel):
    login: str


class _ParentPayload(BaseModel):
    full_name: str


class _RepositoryPayload(BaseModel):
    name: str
    size: int
    owner: _OwnerPayload
    private: bool = False
    parent: _ParentPayload | None = None

    def to_entity(self) -> HostRepository:
        return HostRepository(
            name=self.name,
            size=self.size,
            owner=self.owner.login,
            is_private=self.private,
            parent_full_name=self.parent.full_name if self.parent else None,
        )


class _ContentPayload(BaseModel):
    name: str
    path: str
    type: Literal["file", "dir", "symlink", "submodule"]
    download_url: str | None = None

    def to_entity(self) -> FileTreeEntry:
        return FileTreeEntry(
            name=self.name,
            path=self.path,
            type=EntryType(self.type),
            download_url=self.download_url,
        )


class _HookConfigPayload(BaseModel):
    url: str | None = None


class _HookPayload(BaseModel):
    config: _HookConfigPayload


_REPOSITORY = TypeAdapter(_RepositoryPayload)
_REPOSITORIES = TypeAdapter(list[_RepositoryPayload])
_CONTENTS = TypeAdapter(list[_ContentPayload])
_HOOKS = TypeAdapter(list[_HookPayload])


# ── Adapter ─────────────────────────────────────────────────────────────────


class GitHubRestAdapter:
    """Concrete RepoHost backed by the GitHub v3 REST API.

    One instance serves one request: the caller's credential is bound at
    construction and sent on every authenticated call.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        credential: Credential,
        api_url: str = _GITHUB_API,
        user_agent: str = _USER_AGENT,
    ) -> None:
        self._client = client
        self._api_url = api_url.rstrip("/")
        self._user_agent = user_agent
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": user_agent,
            "Authorization": credential.authorization,
        }

    async def list_user_repositories(self) -> list[HostRepository]:
        """GET /user/repos?sort=created → [HostRepository]."""
        data = await self._api_get("/user/repos", params={"sort": "created"})
        repos = _validate(_REPOSITORIES, data, "/user/repos")
        return [repo.to_entity() for repo in repos]

    async def get_repository(self, ref: RepoRef) -> HostRepository:
        """GET /repos/{owner}/{repo} → HostRepository."""
        endpoint = f"/repos/{ref.owner}/{ref.name}"
        data = await self._api_get(endpoint)
        return _validate(_REPOSITORY, data, endpoint).to_entity()

    async def list_directory(self, ref: RepoRef, path: str = "") -> list[FileTreeEntry]:
        """GET /repos/{owner}/{repo}/contents/{path} → [FileTreeEntry].

        The host answers with an object rather than a list when *path* names
        a file; that is reported as a malformed response.
        """
        endpoint = f"/repos/{ref.owner}/{ref.name}/contents"
        if path:
            endpoint = f"{endpoint}/{quote(path.strip('/'), safe='/')}"
        data = await self._api_get(endpoint)
        entries = _validate(_CONTENTS, data, endpoint)
        return [entry.to_entity() for entry in entries]

    async def get_raw_content(self, url: str) -> str:
        """Fetch raw file text from a download URL (no Authorization header)."""
        resp = await self._get(url, headers={"User-Agent": self._user_agent})
        return resp.text

    async def list_webhooks(self, ref: RepoRef) -> list[Webhook]:
        """GET /repos/{owner}/{repo}/hooks → [Webhook]."""
        endpoint = f"/repos/{ref.owner}/{ref.name}/hooks"
        data = await self._api_get(endpoint)
        hooks = _validate(_HOOKS, data, endpoint)
        return [Webhook(target_url=hook.config.url) for hook in hooks]

    # ── Transport ───────────────────────────────────────────────────────

    async def _api_get(
        self,
        endpoint: str,
        params: dict[str, str] | None = None,
    ) -> Any:
        """Perform an authenticated API GET and return the decoded JSON body."""
        url = f"{self._api_url}{endpoint}"
        resp = await self._get(url, headers=self._api_headers, params=params)
        try:
            return resp.json()
        except ValueError as exc:
            raise HostMalformedResponseError(
                f"Host returned a non-JSON body for {endpoint}"
            ) from exc

    async def _get(
        self,
        url: str,
        headers: dict[str, str],
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """GET *url*, translating transport failures and non-2xx statuses."""
        try:
            resp = await self._client.get(url, headers=headers, params=params)
        except httpx.HTTPError as exc:
            raise HostUnavailableError(f"Network error fetching {url}: {exc}") from exc

        if resp.is_success:
            return resp

        logger.warning("Host rejected GET %s with HTTP %d", url, resp.status_code)
        raise HostRejectedError(resp.status_code, _error_message(resp))


# ── Helpers ─────────────────────────────────────────────────────────────────


def _validate(adapter: TypeAdapter[Any], data: Any, endpoint: str) -> Any:
    try:
        return adapter.validate_python(data)
    except ValidationError as exc:
        raise HostMalformedResponseError(
            f"Unexpected response shape from {endpoint}: "
            f"{exc.error_count()} validation error(s)"
        ) from exc


def _error_message(resp: httpx.Response) -> str:
    """Return the host's own error message, with rate-limit reset time if exhausted."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        message = body["message"]
    else:
        message = resp.text or resp.reason_phrase

    if resp.headers.get("x-ratelimit-remaining") == "0":
        reset_raw = resp.headers.get("x-ratelimit-reset", "")
        try:
            reset_str = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
                "%Y-%m-%d %H:%M:%S UTC"
            )
        except (ValueError, OSError):
            reset_str = reset_raw or "unknown"
        message = f"{message} (rate limit resets at {reset_str})"
    return message
