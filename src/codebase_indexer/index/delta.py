"""Snapshot hashing and incremental change detection."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from codebase_indexer.index.hashing import hash_content
from codebase_indexer.index.models import IndexDelta, ProjectFile


def snapshot_hashes(files: Iterable[ProjectFile]) -> dict[str, str]:
    """Hash indexable files in supplied order; a repeated path keeps its last content."""
    hashes: dict[str, str] = {}
    for file in files:
        if not file.indexable:
            continue
        hashes.pop(file.path, None)
        hashes[file.path] = hash_content(file.content)
    return hashes


def detect_index_delta(
    previous: Mapping[str, str],
    current: Mapping[str, str],
) -> IndexDelta:
    """Compute added/updated/unchanged/removed paths from path -> hash maps.

    Added, updated and unchanged follow the current snapshot order; removed
    follows the previous order.
    """
    added: list[str] = []
    updated: list[str] = []
    unchanged: list[str] = []
    for path, content_hash in current.items():
        previous_hash = previous.get(path)
        if previous_hash is None:
            added.append(path)
        elif previous_hash != content_hash:
            updated.append(path)
        else:
            unchanged.append(path)
    removed = [path for path in previous if path not in current]
    return IndexDelta(
        added=tuple(added),
        updated=tuple(updated),
        unchanged=tuple(unchanged),
        removed=tuple(removed),
    )
