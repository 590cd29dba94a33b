"""FastAPI dependency injection wiring."""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from repo_workbench.domain.ports.llm_gateway import LlmGateway
from repo_workbench.domain.ports.transport import Transport
from repo_workbench.infrastructure.config import get_settings
from repo_workbench.infrastructure.github_rest_adapter import GitHubRestAdapter
from repo_workbench.infrastructure.openai_adapter import OpenAIAdapter
from repo_workbench.services.bulk_upload import BulkUploader
from repo_workbench.services.file_writer import FileWriter
from repo_workbench.services.ref_inspector import RefInspector
from repo_workbench.services.repository_admin import RepositoryAdmin
from repo_workbench.services.subtree_deleter import SubtreeDeleter
from repo_workbench.services.text_generation import TextGenerator
from repo_workbench.services.tree_reader import TreeReader

_http_client: httpx.AsyncClient | None = None
_openai_adapter: OpenAIAdapter | None = None


@dataclass(frozen=True)
class Workbench:
    """All services, sharing one transport and one text generator."""

    reader: TreeReader
    writer: FileWriter
    deleter: SubtreeDeleter
    refs: RefInspector
    admin: RepositoryAdmin
    uploader: BulkUploader
    text: TextGenerator
    commit_page_size: int = 20


def build_workbench(
    transport: Transport,
    llm: LlmGateway | None = None,
    *,
    max_prompt_tokens: int = 2_000,
    commit_page_size: int = 20,
) -> Workbench:
    text = TextGenerator(llm, max_prompt_tokens=max_prompt_tokens)
    reader = TreeReader(transport)
    writer = FileWriter(transport, reader, messages=text if text.enabled else None)
    return Workbench(
        reader=reader,
        writer=writer,
        deleter=SubtreeDeleter(transport, reader),
        refs=RefInspector(transport),
        admin=RepositoryAdmin(transport, writer, text),
        uploader=BulkUploader(writer, text),
        text=text,
        commit_page_size=commit_page_size,
    )


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client, _openai_adapter  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout_seconds))
    if settings.ai_enabled:
        _openai_adapter = OpenAIAdapter(
            api_key=settings.openai_api_key.get_secret_value(),
            model=settings.openai_model,
        )


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _openai_adapter  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None
    if _openai_adapter:
        await _openai_adapter.close()
        _openai_adapter = None


def get_workbench() -> Workbench:
    """Build the service graph around the shared client and configured token."""
    settings = get_settings()

    assert _http_client is not None, "startup() was not called"

    transport = GitHubRestAdapter(
        client=_http_client,
        token=settings.github_token.get_secret_value(),
        base_url=settings.github_api_url,
    )
    return build_workbench(
        transport,
        _openai_adapter,
        max_prompt_tokens=settings.max_prompt_tokens,
        commit_page_size=settings.commit_page_size,
    )
