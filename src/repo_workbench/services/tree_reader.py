"""Tree reader — list directory entries and read file content at a path + branch.

The remote has no directory primitive: a directory listing is whatever
entries share the requested path prefix on that branch, rebuilt on every
call.
"""

from __future__ import annotations

import logging
import unicodedata
from typing import Any
from urllib.parse import quote

from repo_workbench.domain.entities import (
    EntryKind,
    Listing,
    ManyEntries,
    SingleEntry,
    TreeEntry,
)
from repo_workbench.domain.exceptions import TransportError, UnsupportedEncodingError
from repo_workbench.domain.ports.transport import Transport
from repo_workbench.domain.value_objects import RepositoryRef, normalize_path
from repo_workbench.services import content_codec

logger = logging.getLogger(__name__)


def contents_endpoint(repo: RepositoryRef, path: str) -> str:
    """``/repos/{owner}/{name}/contents/{path}`` with the path percent-quoted."""
    return f"/repos/{repo.owner}/{repo.name}/contents/{quote(path, safe='/')}"


def entry_sort_key(entry: TreeEntry) -> tuple[int, str, str]:
    """Directories first, then a case- and accent-insensitive name order."""
    folded = unicodedata.normalize("NFKD", entry.name).casefold()
    return (0 if entry.kind is EntryKind.DIRECTORY else 1, folded, entry.name)


def to_listing(payload: Any) -> Listing:
    """Tag a raw ``/contents`` payload as a single file or a directory listing."""
    if isinstance(payload, list):
        return ManyEntries(tuple(TreeEntry.from_api(item) for item in payload))
    return SingleEntry(TreeEntry.from_api(payload))


class TreeReader:
    """Read-only view of a repository tree."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def fetch(self, repo: RepositoryRef, path: str, branch: str) -> Listing:
        """Return the tagged listing for *path*; errors (404 included) propagate."""
        payload = await self._transport.call(
            contents_endpoint(repo, normalize_path(path)),
            params={"ref": branch},
        )
        return to_listing(payload)

    async def list(self, repo: RepositoryRef, path: str, branch: str) -> tuple[TreeEntry, ...]:
        """List *path* on *branch*, directories first; a missing path lists as empty."""
        try:
            listing = await self.fetch(repo, path, branch)
        except TransportError as exc:
            if exc.is_not_found:
                logger.debug(
                    "No entries at %s:%s@%s (%s)", repo.full_name, path or "/", branch, exc.message
                )
                return ()
            raise

        if isinstance(listing, SingleEntry):
            return (listing.entry,)
        return tuple(sorted(listing.entries, key=entry_sort_key))

    async def get_bytes(self, repo: RepositoryRef, path: str, branch: str) -> bytes:
        """Return the raw content of the file at *path*."""
        payload = await self._transport.call(
            contents_endpoint(repo, normalize_path(path)),
            params={"ref": branch},
        )
        if isinstance(payload, list) or payload.get("type") == "dir":
            raise UnsupportedEncodingError(f"'{path}' is a directory, not a file.")
        if payload.get("encoding") != "base64":
            # Files over 1 MB come back with encoding "none" and no inline content.
            raise UnsupportedEncodingError(
                f"Unsupported file encoding or type for '{path}' "
                f"(encoding={payload.get('encoding')!r})."
            )
        return content_codec.decode_from_transport(payload.get("content", ""))

    async def get_content(self, repo: RepositoryRef, path: str, branch: str) -> str:
        """Return the file at *path* decoded as UTF-8 text."""
        raw = await self.get_bytes(repo, path, branch)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise UnsupportedEncodingError(f"'{path}' is not valid UTF-8 text.") from exc
