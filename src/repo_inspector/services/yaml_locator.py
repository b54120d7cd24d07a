"""Depth-first search for the first YAML configuration file in a repository."""

from __future__ import annotations

import logging

from repo_inspector.domain.entities import EntryType, FileTreeEntry
from repo_inspector.domain.ports.repo_host import RepoHost
from repo_inspector.domain.value_objects import RepoRef

logger = logging.getLogger(__name__)

YAML_SUFFIX = ".yml"


def is_yaml_file(entry: FileTreeEntry) -> bool:
    return entry.type is EntryType.FILE and entry.name.endswith(YAML_SUFFIX)


async def find_yaml(
    host: RepoHost, ref: RepoRef, start_path: str = ""
) -> FileTreeEntry | None:
    """Return the first ``.yml`` file in pre-order, host-listing order.

    Entries of a directory are scanned in the order the host returns them;
    each sub-directory is fully explored before its next sibling, and the
    search stops at the first match.  Host trees are acyclic, so there is
    no depth limit or cycle guard.  A listing failure at any level aborts
    the whole search.
    """
    entries = await host.list_directory(ref, start_path)
    logger.debug("Listed %d entries in %s:/%s", len(entries), ref.full_name, start_path)

    for entry in entries:
        if is_yaml_file(entry):
            return entry
        if entry.type is EntryType.DIR:
            found = await find_yaml(host, ref, entry.path)
            if found is not None:
                return found
    return None
