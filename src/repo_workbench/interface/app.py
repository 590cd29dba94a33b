"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from repo_workbench.infrastructure.config import Settings, get_settings
from repo_workbench.interface.dependencies import shutdown, startup
from repo_workbench.interface.error_handlers import register_error_handlers
from repo_workbench.interface.routes import router

API_DESCRIPTION = (
    "Browse and edit GitHub repositories branch by branch: list trees, "
    "read and write files with sha-checked updates, delete subtrees, "
    "inspect branches and commits, and draft text with an LLM."
)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    await startup()
    try:
        yield
    finally:
        await shutdown()


async def _health() -> dict[str, str]:
    return {"status": "ok"}


def create_app(settings: Settings | None = None) -> FastAPI:
    """Wire routes, error envelopes and (when origins are configured) CORS.

    uvicorn calls this as a factory with no arguments, so *settings* falls
    back to the environment.
    """
    settings = settings or get_settings()
    app = FastAPI(
        title="GitHub Repo Workbench",
        version="1.0.0",
        description=API_DESCRIPTION,
        lifespan=_lifespan,
    )

    if settings.cors_origins:
        # Browser front-ends call the API directly.
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_methods=["GET", "POST", "PUT", "DELETE"],
            allow_headers=["*"],
        )

    register_error_handlers(app)
    app.include_router(router)
    app.add_api_route("/health", _health, methods=["GET"], include_in_schema=False)
    return app
