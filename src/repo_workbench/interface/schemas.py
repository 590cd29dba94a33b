"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from repo_workbench.domain.entities import (
    Branch,
    Commit,
    GitHubUser,
    Repository,
    TreeEntry,
    WriteResult,
)
from repo_workbench.services.file_filter import is_editable

# ── Responses ───────────────────────────────────────────────────────────────


class EntryResponse(BaseModel):
    name: str
    path: str
    sha: str
    size: int
    kind: str
    editable: bool
    download_url: str | None = None
    html_url: str | None = None

    @classmethod
    def from_entity(cls, entry: TreeEntry) -> EntryResponse:
        return cls(
            name=entry.name,
            path=entry.path,
            sha=entry.sha,
            size=entry.size,
            kind=entry.kind.value,
            editable=is_editable(entry),
            download_url=entry.download_url,
            html_url=entry.html_url,
        )


class BranchResponse(BaseModel):
    name: str
    head_sha: str
    protected: bool

    @classmethod
    def from_entity(cls, branch: Branch) -> BranchResponse:
        return cls(name=branch.name, head_sha=branch.head_sha, protected=branch.protected)


class CommitResponse(BaseModel):
    sha: str
    author_name: str
    authored_at: datetime
    message: str
    html_url: str | None = None

    @classmethod
    def from_entity(cls, commit: Commit) -> CommitResponse:
        return cls(
            sha=commit.sha,
            author_name=commit.author_name,
            authored_at=commit.authored_at,
            message=commit.message,
            html_url=commit.html_url,
        )


class UserResponse(BaseModel):
    login: str
    name: str | None = None
    avatar_url: str | None = None
    html_url: str | None = None

    @classmethod
    def from_entity(cls, user: GitHubUser) -> UserResponse:
        return cls(login=user.login, name=user.name, avatar_url=user.avatar_url, html_url=user.html_url)


class RepositoryResponse(BaseModel):
    owner: str
    name: str
    full_name: str
    default_branch: str
    description: str | None = None
    private: bool = False
    html_url: str | None = None
    updated_at: datetime | None = None
    language: str | None = None

    @classmethod
    def from_entity(cls, repo: Repository) -> RepositoryResponse:
        return cls(
            owner=repo.ref.owner,
            name=repo.ref.name,
            full_name=repo.full_name,
            default_branch=repo.ref.default_branch,
            description=repo.description,
            private=repo.private,
            html_url=repo.html_url,
            updated_at=repo.updated_at,
            language=repo.language,
        )


class FileContentResponse(BaseModel):
    path: str
    branch: str
    content: str


class WriteResponse(BaseModel):
    entry: EntryResponse
    commit_sha: str
    created: bool

    @classmethod
    def from_entity(cls, result: WriteResult) -> WriteResponse:
        return cls(
            entry=EntryResponse.from_entity(result.entry),
            commit_sha=result.commit_sha,
            created=result.created,
        )


class DeleteResponse(BaseModel):
    deleted: int


class ExplainResponse(BaseModel):
    explanation: str


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str


# ── Requests ────────────────────────────────────────────────────────────────


class WriteFileRequest(BaseModel):
    """Body for ``PUT /repos/{owner}/{repo}/file``.

    Exactly one of ``content`` (UTF-8 text) or ``content_base64`` (raw
    bytes) must be given.  Omitting ``message`` lets the server generate one.
    """

    path: str = Field(min_length=1)
    branch: str = Field(min_length=1)
    content: str | None = None
    content_base64: str | None = None
    message: str | None = None

    @model_validator(mode="after")
    def _exactly_one_payload(self) -> WriteFileRequest:
        if (self.content is None) == (self.content_base64 is None):
            msg = "Provide exactly one of 'content' or 'content_base64'."
            raise ValueError(msg)
        return self


class CreateDirectoryRequest(BaseModel):
    path: str = Field(min_length=1)
    branch: str = Field(min_length=1)
    message: str = "chore: create directory"


class CreateRepositoryRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str = ""
    private: bool = False


class UploadItem(BaseModel):
    path: str = Field(min_length=1)
    content_base64: str


class UploadFilesRequest(BaseModel):
    branch: str = Field(min_length=1)
    path: str = ""
    files: list[UploadItem] = Field(min_length=1)


class UploadArchiveRequest(BaseModel):
    branch: str = Field(min_length=1)
    path: str = ""
    filename: str = Field(min_length=1)
    content_base64: str
    extract: bool = True


class ExplainRequest(BaseModel):
    filename: str = Field(min_length=1)
    code: str
