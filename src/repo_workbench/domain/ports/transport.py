"""Port: transport — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Any, Protocol

JsonValue = Any


class Transport(Protocol):
    """Authenticated JSON request executor against the remote API."""

    async def call(
        self,
        path_or_url: str,
        method: str = "GET",
        body: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> JsonValue:
        """Perform one request and return the decoded JSON body.

        Returns ``{}`` for *No Content*; raises ``TransportError`` for any
        non-success response.
        """
        ...
