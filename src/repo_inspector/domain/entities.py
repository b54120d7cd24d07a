"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EntryType(str, Enum):
    """Kind of a node returned by the host's contents listing."""

    FILE = "file"
    DIR = "dir"
    SYMLINK = "symlink"
    SUBMODULE = "submodule"


@dataclass(frozen=True, slots=True)
class FileTreeEntry:
    """A single entry of a repository directory listing."""

    name: str
    path: str  # slash-joined from the repository root
    type: EntryType
    download_url: str | None = None


@dataclass(frozen=True, slots=True)
class HostRepository:
    """Repository metadata as reported by the host."""

    name: str
    size: int
    owner: str
    is_private: bool = False
    parent_full_name: str | None = None


@dataclass(frozen=True, slots=True)
class Webhook:
    """A configured webhook; ``target_url`` is absent for non-HTTP hooks."""

    target_url: str | None


@dataclass(frozen=True, slots=True)
class RepositorySummary:
    """One row of the ``listRepositories`` answer."""

    name: str
    size: int
    owner: str
    forked_from: str | None = None

    @classmethod
    def from_host(cls, repo: HostRepository) -> RepositorySummary:
        return cls(
            name=repo.name,
            size=repo.size,
            owner=repo.owner,
            forked_from=repo.parent_full_name,
        )


@dataclass(frozen=True, slots=True)
class RepositoryDetail:
    """The aggregated ``getRepositoryDetails`` answer."""

    name: str
    size: int
    owner: str
    is_private: bool
    number_of_files: int
    yml_content: str
    active_webhooks: tuple[str, ...]
    forked_from: str | None = None
