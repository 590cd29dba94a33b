"""Console entry point: configure logging and start the API server."""

from __future__ import annotations

import logging

import uvicorn

from repo_workbench.infrastructure.config import get_settings

logger = logging.getLogger("repo_workbench")


def main() -> None:
    """Configure logging and serve the workbench API with uvicorn."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )
    # httpx logs every request at INFO; the transport already logs at DEBUG.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logger.info(
        "Using %s (AI text generation %s)",
        settings.github_api_url,
        "enabled" if settings.ai_enabled else "disabled",
    )
    uvicorn.run(
        "repo_workbench.interface.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
