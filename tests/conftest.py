from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from repo_inspector.domain.entities import (
    EntryType,
    FileTreeEntry,
    HostRepository,
    Webhook,
)
from repo_inspector.domain.value_objects import RepoRef


def file_entry(path: str, url: str | None = "auto") -> FileTreeEntry:
    name = path.rsplit("/", 1)[-1]
    if url == "auto":
        url = f"https://raw.example.test/{path}"
    return FileTreeEntry(name=name, path=path, type=EntryType.FILE, download_url=url)


def dir_entry(path: str) -> FileTreeEntry:
    return FileTreeEntry(name=path.rsplit("/", 1)[-1], path=path, type=EntryType.DIR)


@dataclass
class FakeHost:
    """In-memory RepoHost: directories keyed by path, raw contents keyed by URL."""

    tree: dict[str, list[FileTreeEntry]] = field(default_factory=lambda: {"": []})
    contents: dict[str, str] = field(default_factory=dict)
    repository: HostRepository = field(
        default_factory=lambda: HostRepository(name="demo", size=42, owner="octo")
    )
    repositories: list[HostRepository] = field(default_factory=list)
    webhooks: list[Webhook] = field(default_factory=list)
    failures: dict[str, Exception] = field(default_factory=dict)
    calls: list[tuple[str, str]] = field(default_factory=list)

    def _maybe_fail(self, key: str) -> None:
        if key in self.failures:
            raise self.failures[key]

    async def list_user_repositories(self) -> list[HostRepository]:
        self.calls.append(("list_user_repositories", ""))
        self._maybe_fail("list_user_repositories")
        return list(self.repositories)

    async def get_repository(self, ref: RepoRef) -> HostRepository:
        self.calls.append(("get_repository", ref.full_name))
        self._maybe_fail("get_repository")
        return self.repository

    async def list_directory(self, ref: RepoRef, path: str = "") -> list[FileTreeEntry]:
        self.calls.append(("list_directory", path))
        self._maybe_fail(f"list_directory:{path}")
        return list(self.tree.get(path, []))

    async def get_raw_content(self, url: str) -> str:
        self.calls.append(("get_raw_content", url))
        self._maybe_fail("get_raw_content")
        return self.contents[url]

    async def list_webhooks(self, ref: RepoRef) -> list[Webhook]:
        self.calls.append(("list_webhooks", ref.full_name))
        self._maybe_fail("list_webhooks")
        return list(self.webhooks)

    def listed_paths(self) -> list[str]:
        return [arg for name, arg in self.calls if name == "list_directory"]


@pytest.fixture
def ref() -> RepoRef:
    return RepoRef(owner="octo", name="demo")


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()
