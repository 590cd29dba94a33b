"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass

from repo_workbench.domain.exceptions import InvalidPathError, InvalidRepositoryError

_NAME_RE = re.compile(r"^[A-Za-z0-9\-_.]+$")


@dataclass(frozen=True, slots=True)
class RepositoryRef:
    """Identifies one remote repository for the lifetime of a session.

    ``default_branch`` is informational only; every tree operation still
    takes its branch explicitly.
    """

    owner: str
    name: str
    default_branch: str = "main"

    def __post_init__(self) -> None:
        for part in (self.owner, self.name):
            if not _NAME_RE.match(part) or part in (".", ".."):
                raise InvalidRepositoryError(
                    f"Invalid repository identifier: '{self.owner}/{self.name}'. "
                    "Expected format: <owner>/<name>"
                )

    @classmethod
    def from_full_name(cls, full_name: str, default_branch: str = "main") -> RepositoryRef:
        """Parse ``owner/name`` (surrounding whitespace and slashes are ignored)."""
        owner, sep, name = full_name.strip().strip("/").partition("/")
        if not sep or "/" in name:
            raise InvalidRepositoryError(
                f"Invalid repository identifier: '{full_name}'. "
                "Expected format: <owner>/<name>"
            )
        return cls(owner=owner, name=name, default_branch=default_branch)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


def normalize_path(path: str) -> str:
    """Return *path* as a slash-separated path relative to the repository root.

    ``""`` denotes the root.  Backslashes, duplicate and surrounding slashes
    are collapsed; ``.`` segments are dropped and ``..`` is rejected.
    """
    parts = [p for p in path.replace("\\", "/").split("/") if p and p != "."]
    if ".." in parts:
        raise InvalidPathError(f"Path may not contain '..': '{path}'")
    return "/".join(parts)


def join_path(*parts: str) -> str:
    """Join path fragments, ignoring empty ones."""
    return normalize_path("/".join(p for p in parts if p))


def base_name(path: str) -> str:
    return path.rsplit("/", maxsplit=1)[-1]
