"""Domain exception hierarchy.

Inner layers raise these; the interface layer translates them into HTTP
responses.  Nothing here is retried automatically.
"""

from __future__ import annotations


class RepoWorkbenchError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidRepositoryError(RepoWorkbenchError):
    """The supplied ``owner/name`` pair is not a valid repository identifier."""


class InvalidPathError(RepoWorkbenchError):
    """A repository path is malformed or points at the wrong kind of entry."""


# ── Remote store errors ─────────────────────────────────────────────────────


class TransportError(RepoWorkbenchError):
    """Any non-success response from the remote API.

    ``status`` is the HTTP status code, or ``0`` when no response arrived
    (connection refused, DNS failure, timeout raised by the HTTP client).
    """

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message

    @property
    def is_not_found(self) -> bool:
        return self.status == 404

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status}, message={self.message!r})"


class ConflictError(TransportError):
    """The supplied content hash no longer matches the remote entry (409)."""


class UnsupportedEncodingError(RepoWorkbenchError):
    """Remote content cannot be decoded (omitted payload, non-UTF-8 text, ...)."""


# ── LLM errors ──────────────────────────────────────────────────────────────


class LlmError(RepoWorkbenchError):
    """Any error originating from the LLM provider."""
