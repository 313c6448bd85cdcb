"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance, registers the
typed user endpoints and provides the uvicorn entrypoint.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from src.api.dependencies import get_user_service
from src.api.routes import build_router
from src.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "users",
        "description": "Demo user endpoints bound through the typed JSON adapter",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    There are no resources to open or close; startup and shutdown are
    logged so deployments show when the service is ready.
    """
    logger.info("Starting %s with %d routes", app.title, len(app.routes))
    yield
    logger.info("Shutting down %s", app.title)


def create_app() -> FastAPI:
    """Build the application with the user routes mounted at the root."""
    settings = get_settings()
    application = FastAPI(
        title=settings.app_name,
        description="Typed handlers exposed as JSON endpoints with path, query and body binding",
        version="0.1.0",
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )
    application.include_router(build_router(get_user_service()))

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return application


app = create_app()


def run() -> None:
    """Run the application under uvicorn using the configured host and port."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "src.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
