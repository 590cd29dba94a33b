"""API routes — thin controllers that delegate to the services."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from repo_workbench.domain.value_objects import RepositoryRef
from repo_workbench.interface.dependencies import Workbench, get_workbench
from repo_workbench.interface.schemas import (
    BranchResponse,
    CommitResponse,
    CreateDirectoryRequest,
    CreateRepositoryRequest,
    DeleteResponse,
    EntryResponse,
    ExplainRequest,
    ExplainResponse,
    FileContentResponse,
    RepositoryResponse,
    UploadArchiveRequest,
    UploadFilesRequest,
    UserResponse,
    WriteFileRequest,
    WriteResponse,
)
from repo_workbench.services.content_codec import decode_from_transport
from repo_workbench.services.subtree_deleter import delete_message

router = APIRouter()

_REPO = "/repos/{owner}/{repo}"


# ── Account & repositories ──────────────────────────────────────────────────


@router.get("/user", response_model=UserResponse)
async def get_user(wb: Workbench = Depends(get_workbench)) -> UserResponse:
    return UserResponse.from_entity(await wb.admin.get_user())


@router.get("/repos", response_model=list[RepositoryResponse])
async def list_repositories(wb: Workbench = Depends(get_workbench)) -> list[RepositoryResponse]:
    return [RepositoryResponse.from_entity(r) for r in await wb.admin.list_repositories()]


@router.post("/repos", response_model=RepositoryResponse, status_code=201)
async def create_repository(
    body: CreateRepositoryRequest, wb: Workbench = Depends(get_workbench)
) -> RepositoryResponse:
    """Create a repository; a description triggers an AI-drafted README."""
    repo = await wb.admin.create_repository(body.name, body.description, body.private)
    return RepositoryResponse.from_entity(repo)


@router.get(_REPO, response_model=RepositoryResponse)
async def get_repository(owner: str, repo: str, wb: Workbench = Depends(get_workbench)) -> RepositoryResponse:
    ref = RepositoryRef(owner, repo)
    return RepositoryResponse.from_entity(await wb.admin.get_repository(ref.owner, ref.name))


@router.delete(_REPO, status_code=204)
async def delete_repository(owner: str, repo: str, wb: Workbench = Depends(get_workbench)) -> None:
    await wb.admin.delete_repository(RepositoryRef(owner, repo))


# ── Refs ────────────────────────────────────────────────────────────────────


@router.get(f"{_REPO}/branches", response_model=list[BranchResponse])
async def list_branches(
    owner: str, repo: str, wb: Workbench = Depends(get_workbench)
) -> list[BranchResponse]:
    branches = await wb.refs.list_branches(RepositoryRef(owner, repo))
    return [BranchResponse.from_entity(b) for b in branches]


@router.get(f"{_REPO}/commits", response_model=list[CommitResponse])
async def list_commits(
    owner: str,
    repo: str,
    branch: str = Query(min_length=1),
    limit: int | None = Query(default=None, ge=1, le=100),
    wb: Workbench = Depends(get_workbench),
) -> list[CommitResponse]:
    commits = await wb.refs.list_commits(
        RepositoryRef(owner, repo), branch, limit or wb.commit_page_size
    )
    return [CommitResponse.from_entity(c) for c in commits]


# ── Tree ────────────────────────────────────────────────────────────────────


@router.get(f"{_REPO}/tree", response_model=list[EntryResponse])
async def list_tree(
    owner: str,
    repo: str,
    branch: str = Query(min_length=1),
    path: str = "",
    wb: Workbench = Depends(get_workbench),
) -> list[EntryResponse]:
    entries = await wb.reader.list(RepositoryRef(owner, repo), path, branch)
    return [EntryResponse.from_entity(e) for e in entries]


@router.delete(f"{_REPO}/tree", response_model=DeleteResponse)
async def delete_tree(
    owner: str,
    repo: str,
    path: str = Query(min_length=1),
    branch: str = Query(min_length=1),
    wb: Workbench = Depends(get_workbench),
) -> DeleteResponse:
    """Recursively delete every file below *path*."""
    deleted = await wb.deleter.delete_subtree(RepositoryRef(owner, repo), path, branch)
    return DeleteResponse(deleted=deleted)


@router.post(f"{_REPO}/directories", response_model=WriteResponse, status_code=201)
async def create_directory(
    owner: str, repo: str, body: CreateDirectoryRequest, wb: Workbench = Depends(get_workbench)
) -> WriteResponse:
    result = await wb.writer.create_directory_marker(
        RepositoryRef(owner, repo), body.path, body.message, body.branch
    )
    return WriteResponse.from_entity(result)


# ── Files ───────────────────────────────────────────────────────────────────


@router.get(f"{_REPO}/file", response_model=FileContentResponse)
async def read_file(
    owner: str,
    repo: str,
    path: str = Query(min_length=1),
    branch: str = Query(min_length=1),
    wb: Workbench = Depends(get_workbench),
) -> FileContentResponse:
    content = await wb.reader.get_content(RepositoryRef(owner, repo), path, branch)
    return FileContentResponse(path=path, branch=branch, content=content)


@router.put(f"{_REPO}/file", response_model=WriteResponse)
async def write_file(
    owner: str, repo: str, body: WriteFileRequest, wb: Workbench = Depends(get_workbench)
) -> WriteResponse:
    if body.content is not None:
        data = body.content.encode("utf-8")
    else:
        data = decode_from_transport(body.content_base64 or "")
    result = await wb.writer.write(RepositoryRef(owner, repo), body.path, data, body.message, body.branch)
    return WriteResponse.from_entity(result)


@router.delete(f"{_REPO}/file", status_code=204)
async def delete_file(
    owner: str,
    repo: str,
    path: str = Query(min_length=1),
    branch: str = Query(min_length=1),
    sha: str = Query(min_length=1),
    wb: Workbench = Depends(get_workbench),
) -> None:
    await wb.deleter.delete_file(RepositoryRef(owner, repo), path, sha, delete_message(path), branch)


@router.post(f"{_REPO}/uploads", response_model=list[WriteResponse])
async def upload_files(
    owner: str, repo: str, body: UploadFilesRequest, wb: Workbench = Depends(get_workbench)
) -> list[WriteResponse]:
    files = [(item.path, decode_from_transport(item.content_base64)) for item in body.files]
    results = await wb.uploader.upload_files(RepositoryRef(owner, repo), body.path, files, body.branch)
    return [WriteResponse.from_entity(r) for r in results]


@router.post(f"{_REPO}/archives", response_model=list[WriteResponse])
async def upload_archive(
    owner: str, repo: str, body: UploadArchiveRequest, wb: Workbench = Depends(get_workbench)
) -> list[WriteResponse]:
    results = await wb.uploader.upload_archive(
        RepositoryRef(owner, repo),
        body.path,
        body.filename,
        decode_from_transport(body.content_base64),
        body.branch,
        extract=body.extract,
    )
    return [WriteResponse.from_entity(r) for r in results]


# ── AI helpers ──────────────────────────────────────────────────────────────


@router.post("/explain", response_model=ExplainResponse)
async def explain(body: ExplainRequest, wb: Workbench = Depends(get_workbench)) -> ExplainResponse:
    return ExplainResponse(explanation=await wb.text.explain_code(body.filename, body.code))
