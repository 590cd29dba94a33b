"""File writer — create or replace a single file on one branch.

Writes follow a read-before-write protocol: the current entry is looked up
on the target branch and its sha is sent as the match token.  If someone
else changed the file in between, the remote answers 409 and the write
fails with :class:`ConflictError`; it is never retried here.
"""

from __future__ import annotations

import logging

from repo_workbench.domain.entities import SingleEntry, TreeEntry, WriteResult
from repo_workbench.domain.exceptions import InvalidPathError, TransportError
from repo_workbench.domain.ports.llm_gateway import CommitMessageSource
from repo_workbench.domain.ports.transport import Transport
from repo_workbench.domain.value_objects import (
    RepositoryRef,
    base_name,
    join_path,
    normalize_path,
)
from repo_workbench.services import content_codec
from repo_workbench.services.tree_reader import TreeReader, contents_endpoint

logger = logging.getLogger(__name__)

DIRECTORY_MARKER = ".gitkeep"

# Only this much of a file is shown to the commit-message generator.
_MESSAGE_PREVIEW_BYTES = 10_000


class FileWriter:
    """Create-or-replace writes against the contents API.

    Parameters
    ----------
    transport:
        Authenticated request executor.
    reader:
        Tree reader used for the pre-write lookup.
    messages:
        Optional source of generated commit messages, consulted only when a
        caller passes ``message=None``.
    """

    def __init__(
        self,
        transport: Transport,
        reader: TreeReader,
        messages: CommitMessageSource | None = None,
    ) -> None:
        self._transport = transport
        self._reader = reader
        self._messages = messages

    async def current_sha(self, repo: RepositoryRef, path: str, branch: str) -> str | None:
        """Return the sha of the file at *path*, or ``None`` if it is confirmed absent.

        Only a 404 counts as absent.  Any other lookup failure propagates so
        an update is never misclassified as a create.
        """
        try:
            listing = await self._reader.fetch(repo, path, branch)
        except TransportError as exc:
            if exc.is_not_found:
                return None
            raise
        if not isinstance(listing, SingleEntry) or listing.entry.is_directory:
            raise InvalidPathError(f"'{path}' is a directory on {branch}; cannot write a file there.")
        return listing.entry.sha

    async def write(
        self,
        repo: RepositoryRef,
        path: str,
        content: bytes,
        message: str | None,
        branch: str,
    ) -> WriteResult:
        """Create *path* on *branch*, or replace it if it already exists."""
        path = normalize_path(path)
        if not path:
            raise InvalidPathError("Cannot write to the repository root.")

        sha = await self.current_sha(repo, path, branch)
        if message is None:
            message = await self._default_message(path, content)

        body: dict[str, str] = {
            "message": message,
            "content": content_codec.encode_for_transport(content),
            "branch": branch,
        }
        if sha is not None:
            body["sha"] = sha

        payload = await self._transport.call(contents_endpoint(repo, path), "PUT", body)

        created = sha is None
        logger.info(
            "%s %s:%s@%s (%d bytes)",
            "Created" if created else "Updated",
            repo.full_name,
            path,
            branch,
            len(content),
        )
        return WriteResult(
            entry=TreeEntry.from_api(payload.get("content") or {"path": path}),
            commit_sha=(payload.get("commit") or {}).get("sha", ""),
            created=created,
        )

    async def write_text(
        self,
        repo: RepositoryRef,
        path: str,
        text: str,
        message: str | None,
        branch: str,
    ) -> WriteResult:
        return await self.write(repo, path, text.encode("utf-8"), message, branch)

    async def create_directory_marker(
        self,
        repo: RepositoryRef,
        path: str,
        message: str,
        branch: str,
    ) -> WriteResult:
        """Materialise directory *path* by writing an empty placeholder inside it."""
        directory = normalize_path(path)
        if not directory:
            raise InvalidPathError("The repository root already exists.")
        return await self.write(repo, join_path(directory, DIRECTORY_MARKER), b"", message, branch)

    async def _default_message(self, path: str, content: bytes) -> str:
        name = base_name(path)
        if self._messages is None:
            return f"chore: update {name}"
        preview = content[:_MESSAGE_PREVIEW_BYTES].decode("utf-8", errors="replace")
        return await self._messages.suggest_commit_message(name, preview)
