"""GitHub REST API adapter — implements the Transport port."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from repo_workbench.domain.exceptions import ConflictError, TransportError

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"


class GitHubRestAdapter:
    """Concrete Transport backed by the GitHub v3 REST API.

    The bearer token is fixed at construction and sent on every call.  No
    retries are attempted; timeouts are whatever the injected client uses.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str,
        base_url: str = _GITHUB_API,
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "Content-Type": "application/json",
            "User-Agent": "repo-workbench/1.0",
            "Authorization": f"Bearer {token}",
        }

    async def call(
        self,
        path_or_url: str,
        method: str = "GET",
        body: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        """Perform one API request and return its decoded JSON body."""
        url = path_or_url if path_or_url.startswith("http") else f"{self._base_url}{path_or_url}"
        try:
            resp = await self._client.request(
                method,
                url,
                headers=self._headers,
                params=params,
                json=body,
            )
        except httpx.HTTPError as exc:
            raise TransportError(0, f"Network error calling {method} {url}: {exc}") from exc

        logger.debug("%s %s -> %d", method, url, resp.status_code)

        if resp.is_success:
            if resp.status_code == 204 or not resp.content:
                return {}
            return resp.json()

        message = _error_message(resp)
        if resp.status_code == 409:
            raise ConflictError(409, message)
        raise TransportError(resp.status_code, message)


def _error_message(resp: httpx.Response) -> str:
    """Extract the API's ``message`` field, falling back to a status-derived text."""
    message = ""
    try:
        data = resp.json()
        if isinstance(data, dict):
            message = str(data.get("message") or "")
    except ValueError:
        pass

    if resp.status_code == 403 and resp.headers.get("x-ratelimit-remaining") == "0":
        reset_raw = resp.headers.get("x-ratelimit-reset", "")
        try:
            reset_str = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
                "%Y-%m-%d %H:%M:%S UTC"
            )
        except (ValueError, OSError):
            reset_str = reset_raw or "unknown"
        return f"GitHub API rate limit exceeded. Resets at {reset_str}."

    return message or f"GitHub API error: HTTP {resp.status_code}"
