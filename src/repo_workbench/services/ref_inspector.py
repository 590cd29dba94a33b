"""Branch and commit inspection — read-only."""

from __future__ import annotations

from repo_workbench.domain.entities import Branch, Commit
from repo_workbench.domain.ports.transport import Transport
from repo_workbench.domain.value_objects import RepositoryRef

_MAX_PAGE_SIZE = 100


class RefInspector:
    """Lists the refs a caller can choose to act against."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def list_branches(self, repo: RepositoryRef) -> tuple[Branch, ...]:
        """Branches in the order the remote returns them."""
        payload = await self._transport.call(
            f"/repos/{repo.owner}/{repo.name}/branches",
            params={"per_page": str(_MAX_PAGE_SIZE)},
        )
        return tuple(Branch.from_api(item) for item in payload)

    async def list_commits(
        self, repo: RepositoryRef, branch: str, limit: int = 20
    ) -> tuple[Commit, ...]:
        """Up to *limit* commits reachable from *branch*, in the remote's history order."""
        limit = max(1, min(limit, _MAX_PAGE_SIZE))
        payload = await self._transport.call(
            f"/repos/{repo.owner}/{repo.name}/commits",
            params={"sha": branch, "per_page": str(limit)},
        )
        return tuple(Commit.from_api(item) for item in payload[:limit])
