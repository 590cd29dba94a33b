"""Recursive deleter — remove a file or a whole subtree on one branch.

A directory exists only while some file lives under it, so deleting a
subtree means deleting every file beneath it; no call is ever made for a
directory node.  Each file is deleted with the sha from the listing taken
during the same traversal.  There is no multi-file transaction: if a call
fails, the error propagates and whatever was already deleted stays deleted.
Running the operation again re-lists and removes only what is left.
"""

from __future__ import annotations

import logging

from repo_workbench.domain.entities import TreeEntry
from repo_workbench.domain.exceptions import InvalidPathError
from repo_workbench.domain.ports.transport import Transport
from repo_workbench.domain.value_objects import RepositoryRef, normalize_path
from repo_workbench.services.tree_reader import TreeReader, contents_endpoint

logger = logging.getLogger(__name__)


def delete_message(path: str) -> str:
    return f"chore: delete {path}"


class SubtreeDeleter:
    """Sequential, depth-first deletion against the contents API."""

    def __init__(self, transport: Transport, reader: TreeReader) -> None:
        self._transport = transport
        self._reader = reader

    async def delete_file(
        self,
        repo: RepositoryRef,
        path: str,
        sha: str,
        message: str,
        branch: str,
    ) -> None:
        """Delete one file; *sha* must be its current content hash on *branch*."""
        path = normalize_path(path)
        await self._transport.call(
            contents_endpoint(repo, path),
            "DELETE",
            {"message": message, "sha": sha, "branch": branch},
        )
        logger.info("Deleted %s:%s@%s", repo.full_name, path, branch)

    async def delete_subtree(self, repo: RepositoryRef, path: str, branch: str) -> int:
        """Delete every file below *path*; return how many files were removed."""
        path = normalize_path(path)
        if not path:
            raise InvalidPathError("Refusing to delete the repository root.")

        deleted = 0
        entries = await self._reader.list(repo, path, branch)
        for entry in entries:
            if entry.is_directory:
                deleted += await self.delete_subtree(repo, entry.path, branch)
            else:
                await self.delete_file(repo, entry.path, entry.sha, delete_message(entry.path), branch)
                deleted += 1
        return deleted

    async def delete_entry(self, repo: RepositoryRef, entry: TreeEntry, branch: str) -> int:
        """Delete a listed entry: recursively for a directory, directly for a file."""
        if entry.is_directory:
            return await self.delete_subtree(repo, entry.path, branch)
        await self.delete_file(repo, entry.path, entry.sha, delete_message(entry.path), branch)
        return 1
