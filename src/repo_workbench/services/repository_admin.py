"""Repository administration — account, repository listing, create and delete."""

from __future__ import annotations

import logging

from repo_workbench.domain.entities import GitHubUser, Repository
from repo_workbench.domain.ports.transport import Transport
from repo_workbench.domain.value_objects import RepositoryRef
from repo_workbench.services.file_writer import FileWriter
from repo_workbench.services.text_generation import TextGenerator

logger = logging.getLogger(__name__)

README_PATH = "README.md"
README_COMMIT_MESSAGE = "docs: auto-generated README"


class RepositoryAdmin:
    """Operations on whole repositories owned by the authenticated user."""

    def __init__(self, transport: Transport, writer: FileWriter, text: TextGenerator) -> None:
        self._transport = transport
        self._writer = writer
        self._text = text

    async def get_user(self) -> GitHubUser:
        return GitHubUser.from_api(await self._transport.call("/user"))

    async def list_repositories(self) -> list[Repository]:
        """Repositories visible to the token, most recently updated first."""
        payload = await self._transport.call(
            "/user/repos", params={"sort": "updated", "per_page": "100"}
        )
        return [Repository.from_api(item) for item in payload]

    async def get_repository(self, owner: str, name: str) -> Repository:
        return Repository.from_api(await self._transport.call(f"/repos/{owner}/{name}"))

    async def create_repository(
        self, name: str, description: str = "", private: bool = False
    ) -> Repository:
        """Create an initialised repository, seeding an AI-drafted README when described.

        ``auto_init`` gives the new repository a first commit (and a stock
        README) on its default branch, so the drafted README is an update.
        """
        payload = await self._transport.call(
            "/user/repos",
            "POST",
            {"name": name, "description": description, "private": private, "auto_init": True},
        )
        repo = Repository.from_api(payload)
        logger.info("Created repository %s", repo.full_name)

        if description:
            readme = await self._text.draft_readme(name, description)
            await self._writer.write_text(
                repo.ref, README_PATH, readme, README_COMMIT_MESSAGE, repo.ref.default_branch
            )
        return repo

    async def delete_repository(self, repo: RepositoryRef) -> None:
        await self._transport.call(f"/repos/{repo.owner}/{repo.name}", "DELETE")
        logger.info("Deleted repository %s", repo.full_name)
