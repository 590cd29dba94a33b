"""Domain entities — pure data structures with no external dependencies.

Every entity is rebuilt from a fresh API payload on each call; none of them
is cached or persisted locally.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Union

from repo_workbench.domain.value_objects import RepositoryRef


class EntryKind(str, Enum):
    """Kind of a repository tree entry."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True, slots=True)
class TreeEntry:
    """One entry of a directory listing at a given path and branch.

    ``sha`` is the remote's identity token for this exact content; it must
    accompany any overwrite or delete of the entry and goes stale as soon as
    the entry is changed elsewhere.
    """

    name: str
    path: str
    sha: str
    size: int
    kind: EntryKind
    download_url: str | None = None
    html_url: str | None = None

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> TreeEntry:
        """Build an entry from a ``/contents`` item (file, dir, symlink, submodule)."""
        path = data.get("path", "")
        return cls(
            name=data.get("name") or path.rsplit("/", maxsplit=1)[-1],
            path=path,
            sha=data.get("sha", ""),
            size=data.get("size") or 0,
            kind=EntryKind.DIRECTORY if data.get("type") == "dir" else EntryKind.FILE,
            download_url=data.get("download_url"),
            html_url=data.get("html_url"),
        )


@dataclass(frozen=True, slots=True)
class SingleEntry:
    """The contents endpoint answered with one object: the path is a file."""

    entry: TreeEntry


@dataclass(frozen=True, slots=True)
class ManyEntries:
    """The contents endpoint answered with an array: the path is a directory."""

    entries: tuple[TreeEntry, ...]


Listing = Union[SingleEntry, ManyEntries]


@dataclass(frozen=True, slots=True)
class WriteResult:
    """Outcome of a create-or-replace write."""

    entry: TreeEntry
    commit_sha: str
    created: bool


@dataclass(frozen=True, slots=True)
class Branch:
    name: str
    head_sha: str
    protected: bool = False

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Branch:
        return cls(
            name=data["name"],
            head_sha=(data.get("commit") or {}).get("sha", ""),
            protected=bool(data.get("protected", False)),
        )


@dataclass(frozen=True, slots=True)
class Commit:
    sha: str
    author_name: str
    authored_at: datetime
    message: str
    html_url: str | None = None

    @property
    def short_sha(self) -> str:
        return self.sha[:7]

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Commit:
        detail = data.get("commit") or {}
        author = detail.get("author") or {}
        return cls(
            sha=data["sha"],
            author_name=author.get("name", ""),
            authored_at=parse_timestamp(author.get("date")),
            message=detail.get("message", ""),
            html_url=data.get("html_url"),
        )


@dataclass(frozen=True, slots=True)
class GitHubUser:
    login: str
    name: str | None = None
    avatar_url: str | None = None
    html_url: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> GitHubUser:
        return cls(
            login=data["login"],
            name=data.get("name"),
            avatar_url=data.get("avatar_url"),
            html_url=data.get("html_url"),
        )


@dataclass(frozen=True, slots=True)
class Repository:
    """Repository metadata as listed for the authenticated user."""

    ref: RepositoryRef
    description: str | None = None
    private: bool = False
    html_url: str | None = None
    updated_at: datetime | None = None
    language: str | None = None

    @property
    def full_name(self) -> str:
        return self.ref.full_name

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Repository:
        owner = (data.get("owner") or {}).get("login") or data["full_name"].split("/")[0]
        return cls(
            ref=RepositoryRef(
                owner=owner,
                name=data["name"],
                default_branch=data.get("default_branch") or "main",
            ),
            description=data.get("description"),
            private=bool(data.get("private", False)),
            html_url=data.get("html_url"),
            updated_at=parse_timestamp(data["updated_at"]) if data.get("updated_at") else None,
            language=data.get("language"),
        )


def parse_timestamp(raw: str | None) -> datetime:
    """Parse an ISO-8601 API timestamp (``2024-05-01T12:00:00Z``) into an aware datetime."""
    if not raw:
        return datetime.fromtimestamp(0, tz=timezone.utc)
    parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
