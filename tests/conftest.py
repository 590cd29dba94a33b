"""Shared fixtures: an in-memory GitHub contents API and service wiring."""

from __future__ import annotations

import base64
import hashlib
import json
from typing import Callable

import httpx
import pytest
import pytest_asyncio
from pytest_httpx import HTTPXMock

from repo_workbench.domain.exceptions import LlmError
from repo_workbench.domain.value_objects import RepositoryRef
from repo_workbench.infrastructure.github_rest_adapter import GitHubRestAdapter
from repo_workbench.services.file_writer import FileWriter
from repo_workbench.services.subtree_deleter import SubtreeDeleter
from repo_workbench.services.tree_reader import TreeReader

API = "https://api.github.com"
TOKEN = "ghp_test_token"
REPO = RepositoryRef("octo", "demo")


def blob_sha(data: bytes) -> str:
    return hashlib.sha1(b"blob %d\x00" % len(data) + data).hexdigest()


def _wrap_base64(data: bytes) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return "\n".join(encoded[i : i + 60] for i in range(0, len(encoded), 60)) + "\n"


class FakeGitHub:
    """Branch-scoped file store that speaks the ``/contents`` protocol.

    Directories are never stored: a directory listing is derived from the
    paths of the files on the requested branch.
    """

    def __init__(self, owner: str = "octo", repo: str = "demo") -> None:
        self.prefix = f"/repos/{owner}/{repo}/contents"
        self.branches: dict[str, dict[str, bytes]] = {"main": {}}
        self.requests: list[tuple[str, str, dict]] = []
        self.oversized: set[str] = set()
        self.fail_get: dict[str, int] = {}
        self.fail_delete_number: int | None = None
        self.after_get: Callable[[str, str], None] | None = None
        self._delete_attempts = 0
        self._commits = 0

    # ── test helpers ────────────────────────────────────────────────────

    def seed(self, files: dict[str, bytes | str], branch: str = "main") -> None:
        store = self.branches.setdefault(branch, {})
        for path, data in files.items():
            store[path] = data.encode("utf-8") if isinstance(data, str) else data

    def files(self, branch: str = "main") -> dict[str, bytes]:
        return self.branches.get(branch, {})

    def sha_of(self, path: str, branch: str = "main") -> str:
        return blob_sha(self.branches[branch][path])

    def calls(self, method: str) -> list[tuple[str, dict]]:
        return [(path, body) for m, path, body in self.requests if m == method]

    # ── protocol ────────────────────────────────────────────────────────

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if not request.url.path.startswith(self.prefix):
            return httpx.Response(404, json={"message": "Not Found"})
        path = request.url.path[len(self.prefix) :].strip("/")
        body = json.loads(request.content) if request.content else {}
        self.requests.append((request.method, path, body))

        if request.method == "GET":
            response = self._get(path, request.url.params.get("ref", "main"))
            if self.after_get is not None:
                self.after_get(path, request.url.params.get("ref", "main"))
            return response
        if request.method == "PUT":
            return self._put(path, body)
        if request.method == "DELETE":
            return self._delete(path, body)
        return httpx.Response(405, json={"message": "Method Not Allowed"})

    def _entry(self, path: str, data: bytes | None) -> dict:
        name = path.rsplit("/", maxsplit=1)[-1]
        if data is None:
            return {
                "type": "dir",
                "name": name,
                "path": path,
                "sha": hashlib.sha1(path.encode()).hexdigest(),
                "size": 0,
                "download_url": None,
                "html_url": f"https://github.com/octo/demo/tree/main/{path}",
            }
        return {
            "type": "file",
            "name": name,
            "path": path,
            "sha": blob_sha(data),
            "size": len(data),
            "download_url": f"https://raw.githubusercontent.com/octo/demo/main/{path}",
            "html_url": f"https://github.com/octo/demo/blob/main/{path}",
        }

    def _get(self, path: str, branch: str) -> httpx.Response:
        if path in self.fail_get:
            return httpx.Response(self.fail_get[path], json={"message": "Server Error"})
        if branch not in self.branches:
            return httpx.Response(404, json={"message": f"No commit found for the ref {branch}"})
        files = self.branches[branch]

        if path in files:
            data = files[path]
            item = self._entry(path, data)
            if path in self.oversized:
                item.update(encoding="none", content="")
            else:
                item.update(encoding="base64", content=_wrap_base64(data))
            return httpx.Response(200, json=item)

        children: dict[str, dict] = {}
        prefix = f"{path}/" if path else ""
        for file_path, data in files.items():
            if not file_path.startswith(prefix):
                continue
            head, sep, _rest = file_path[len(prefix) :].partition("/")
            child = f"{prefix}{head}"
            children.setdefault(child, self._entry(child, None if sep else data))
        if not children:
            message = "This repository is empty." if not path and not files else "Not Found"
            return httpx.Response(404, json={"message": message})
        return httpx.Response(200, json=list(children.values()))

    def _commit(self) -> dict:
        self._commits += 1
        return {"sha": f"{self._commits:040x}", "message": "commit"}

    def _put(self, path: str, body: dict) -> httpx.Response:
        files = self.branches.setdefault(body["branch"], {})
        if path in files:
            current = blob_sha(files[path])
            if "sha" not in body:
                return httpx.Response(
                    422, json={"message": 'Invalid request.\n\n"sha" wasn\'t supplied.'}
                )
            if body["sha"] != current:
                return httpx.Response(
                    409, json={"message": f"{path} does not match {body['sha']}"}
                )
            status = 200
        else:
            status = 201
        files[path] = base64.b64decode(body["content"])
        return httpx.Response(
            status, json={"content": self._entry(path, files[path]), "commit": self._commit()}
        )

    def _delete(self, path: str, body: dict) -> httpx.Response:
        self._delete_attempts += 1
        if self.fail_delete_number == self._delete_attempts:
            return httpx.Response(500, json={"message": "Server Error"})
        files = self.branches.get(body["branch"], {})
        if path not in files:
            return httpx.Response(404, json={"message": "Not Found"})
        if body.get("sha") != blob_sha(files[path]):
            return httpx.Response(409, json={"message": f"{path} does not match {body.get('sha')}"})
        del files[path]
        return httpx.Response(200, json={"content": None, "commit": self._commit()})


class StubLlm:
    """LlmGateway double that records prompts and returns a canned reply."""

    def __init__(self, reply: str = "feat(core): add module", fail: bool = False) -> None:
        self.reply = reply
        self.fail = fail
        self.prompts: list[tuple[str, str]] = []

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        self.prompts.append((system_prompt, user_prompt))
        if self.fail:
            raise LlmError("quota exceeded")
        return self.reply


class StubMessages:
    """CommitMessageSource double."""

    def __init__(self, message: str = "feat: generated message") -> None:
        self.message = message
        self.seen: list[tuple[str, str]] = []

    async def suggest_commit_message(self, filename: str, content: str) -> str:
        self.seen.append((filename, content))
        return self.message


# ── fixtures ────────────────────────────────────────────────────────────────


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest_asyncio.fixture
async def http_client():
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture
def api(http_client: httpx.AsyncClient) -> GitHubRestAdapter:
    """Adapter for tests that register individual responses on ``httpx_mock``."""
    return GitHubRestAdapter(http_client, token=TOKEN)


@pytest.fixture
def transport(
    httpx_mock: HTTPXMock, fake_github: FakeGitHub, http_client: httpx.AsyncClient
) -> GitHubRestAdapter:
    """Adapter whose every request is served by ``fake_github``."""
    httpx_mock.add_callback(fake_github, is_reusable=True, is_optional=True)
    return GitHubRestAdapter(http_client, token=TOKEN)


@pytest.fixture
def reader(transport: GitHubRestAdapter) -> TreeReader:
    return TreeReader(transport)


@pytest.fixture
def writer(transport: GitHubRestAdapter, reader: TreeReader) -> FileWriter:
    return FileWriter(transport, reader)


@pytest.fixture
def deleter(transport: GitHubRestAdapter, reader: TreeReader) -> SubtreeDeleter:
    return SubtreeDeleter(transport, reader)
