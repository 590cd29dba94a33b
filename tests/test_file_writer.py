"""Tests for sha-checked create-or-replace writes."""

import pytest

from repo_workbench.domain.entities import EntryKind
from repo_workbench.domain.exceptions import ConflictError, InvalidPathError, TransportError
from repo_workbench.services.file_writer import FileWriter
from repo_workbench.services.tree_reader import TreeReader

from conftest import REPO, FakeGitHub, StubMessages, blob_sha


class TestWrite:
    @pytest.mark.asyncio
    async def test_new_file_sends_no_match_token(self, fake_github: FakeGitHub, writer: FileWriter):
        result = await writer.write(REPO, "src/new.py", b"print('hi')\n", "feat: add new", "main")

        [(path, body)] = fake_github.calls("PUT")
        assert path == "src/new.py"
        assert "sha" not in body
        assert body["branch"] == "main"
        assert body["message"] == "feat: add new"
        assert result.created is True
        assert result.entry.path == "src/new.py"
        assert result.commit_sha
        assert fake_github.files()["src/new.py"] == b"print('hi')\n"

    @pytest.mark.asyncio
    async def test_existing_file_sends_token_from_lookup(self, fake_github: FakeGitHub, writer: FileWriter):
        fake_github.seed({"README.md": "old"})
        original_sha = fake_github.sha_of("README.md")

        result = await writer.write(REPO, "README.md", b"new", "docs: update", "main")

        [(_, body)] = fake_github.calls("PUT")
        assert body["sha"] == original_sha
        assert result.created is False
        assert result.entry.sha == blob_sha(b"new")
        assert fake_github.files()["README.md"] == b"new"

    @pytest.mark.asyncio
    async def test_lookup_and_write_use_same_branch(self, fake_github: FakeGitHub, writer: FileWriter):
        fake_github.seed({"app.py": "main version"})
        fake_github.seed({"app.py": "feature version"}, branch="feature")

        await writer.write(REPO, "app.py", b"updated", "chore: update", "feature")

        [(_, body)] = fake_github.calls("PUT")
        assert body["sha"] == blob_sha(b"feature version")
        assert body["branch"] == "feature"
        assert fake_github.files("main")["app.py"] == b"main version"

    @pytest.mark.asyncio
    async def test_concurrent_change_surfaces_conflict(self, fake_github: FakeGitHub, writer: FileWriter):
        fake_github.seed({"config.toml": "v1"})
        stale = fake_github.sha_of("config.toml")

        def someone_else_commits(path: str, branch: str) -> None:
            fake_github.seed({"config.toml": "v2"}, branch=branch)
            fake_github.after_get = None

        fake_github.after_get = someone_else_commits

        with pytest.raises(ConflictError) as exc_info:
            await writer.write(REPO, "config.toml", b"mine", "chore: update", "main")

        assert exc_info.value.status == 409
        [(_, body)] = fake_github.calls("PUT")
        assert body["sha"] == stale
        assert fake_github.files()["config.toml"] == b"v2"

    @pytest.mark.asyncio
    async def test_failed_lookup_is_not_treated_as_create(self, fake_github: FakeGitHub, writer: FileWriter):
        fake_github.fail_get["flaky.txt"] = 503

        with pytest.raises(TransportError) as exc_info:
            await writer.write(REPO, "flaky.txt", b"x", "chore", "main")

        assert exc_info.value.status == 503
        assert fake_github.calls("PUT") == []

    @pytest.mark.asyncio
    async def test_refuses_to_overwrite_a_directory(self, fake_github: FakeGitHub, writer: FileWriter):
        fake_github.seed({"src/app.py": "x"})

        with pytest.raises(InvalidPathError):
            await writer.write(REPO, "src", b"x", "chore", "main")

        assert fake_github.calls("PUT") == []

    @pytest.mark.asyncio
    async def test_refuses_repository_root(self, writer: FileWriter):
        with pytest.raises(InvalidPathError):
            await writer.write(REPO, "/", b"x", "chore", "main")

    @pytest.mark.asyncio
    async def test_write_text_encodes_utf8(self, fake_github: FakeGitHub, writer: FileWriter):
        await writer.write_text(REPO, "hello.md", "grüße 👋", "docs: greet", "main")

        assert fake_github.files()["hello.md"] == "grüße 👋".encode("utf-8")


class TestCommitMessages:
    @pytest.mark.asyncio
    async def test_default_message_without_generator(self, fake_github: FakeGitHub, writer: FileWriter):
        await writer.write(REPO, "src/app.py", b"x", None, "main")

        [(_, body)] = fake_github.calls("PUT")
        assert body["message"] == "chore: update app.py"

    @pytest.mark.asyncio
    async def test_generated_message_when_none_given(self, fake_github: FakeGitHub, transport, reader: TreeReader):
        messages = StubMessages("feat(app): add entry point")
        writer = FileWriter(transport, reader, messages=messages)

        await writer.write(REPO, "src/app.py", b"print('hi')", None, "main")

        [(_, body)] = fake_github.calls("PUT")
        assert body["message"] == "feat(app): add entry point"
        assert messages.seen == [("app.py", "print('hi')")]

    @pytest.mark.asyncio
    async def test_explicit_message_skips_generator(self, fake_github: FakeGitHub, transport, reader: TreeReader):
        messages = StubMessages()
        writer = FileWriter(transport, reader, messages=messages)

        await writer.write(REPO, "a.txt", b"x", "chore: mine", "main")

        assert messages.seen == []


class TestDirectoryMarker:
    @pytest.mark.asyncio
    async def test_marker_makes_directory_listable(self, fake_github: FakeGitHub, writer: FileWriter, reader: TreeReader):
        await writer.create_directory_marker(REPO, "docs/", "chore: create directory", "main")

        entries = await reader.list(REPO, "docs", "main")

        assert len(entries) == 1
        assert entries[0].name == ".gitkeep"
        assert entries[0].kind is EntryKind.FILE
        assert fake_github.files()["docs/.gitkeep"] == b""

    @pytest.mark.asyncio
    async def test_nested_directory(self, fake_github: FakeGitHub, writer: FileWriter, reader: TreeReader):
        await writer.create_directory_marker(REPO, "a/b/c", "chore: create directory", "main")

        [top] = await reader.list(REPO, "a", "main")
        assert top.kind is EntryKind.DIRECTORY
        assert top.path == "a/b"

    @pytest.mark.asyncio
    async def test_root_is_rejected(self, writer: FileWriter):
        with pytest.raises(InvalidPathError):
            await writer.create_directory_marker(REPO, "", "chore", "main")
