"""Global exception handlers — translate domain errors to HTTP responses.

Every failure uses the ``{"status": "error", "message": "..."}`` envelope,
carrying the remote API's own message whenever it supplied one.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from repo_workbench.domain.exceptions import (
    ConflictError,
    InvalidPathError,
    InvalidRepositoryError,
    LlmError,
    TransportError,
    UnsupportedEncodingError,
)

logger = logging.getLogger(__name__)

_EXCEPTION_STATUS: list[tuple[type[Exception], int]] = [
    (InvalidRepositoryError, 422),
    (InvalidPathError, 422),
    (UnsupportedEncodingError, 415),
    (LlmError, 502),
]

# Remote statuses passed through as-is; anything else is a bad gateway.
_PASSTHROUGH_STATUSES = frozenset({401, 403, 404, 422, 429})


def _error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
    )


def transport_status(exc: TransportError) -> int:
    if isinstance(exc, ConflictError):
        return 409
    if exc.status in _PASSTHROUGH_STATUSES:
        return exc.status
    return 502


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    for exc_type, code in _EXCEPTION_STATUS:

        def _make_handler(status_code: int):  # type: ignore[no-untyped-def]
            async def handler(request: Request, exc: Exception) -> JSONResponse:
                logger.warning("%s: %s", type(exc).__name__, exc)
                return _error_json(status_code, str(exc))

            return handler

        app.add_exception_handler(exc_type, _make_handler(code))

    @app.exception_handler(TransportError)
    async def transport_handler(request: Request, exc: TransportError) -> JSONResponse:
        status_code = transport_status(exc)
        logger.warning("%s (remote status %d): %s", type(exc).__name__, exc.status, exc.message)
        return _error_json(status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = []
        for err in exc.errors():
            loc = " → ".join(str(p) for p in err.get("loc", []))
            messages.append(f"{loc}: {err.get('msg', 'validation error')}")
        return _error_json(422, "; ".join(messages))

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return _error_json(500, "An unexpected error occurred. Please try again later.")
