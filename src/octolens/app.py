"""FastAPI application factory and lifespan management.

This module contains the create_app() factory function that creates and configures
the FastAPI application instance, including lifespan management for startup/shutdown
and router registration.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from octolens import __version__
from octolens.config import OctolensSettings
from octolens.errors import ConfigurationError
from octolens.llm import create_chat_client
from octolens.routers import health, run, tools
from octolens.tools import GitHubClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager for FastAPI application.

    Expensive objects (the model provider client and the GitHub client) are
    created once at startup and stored in app.state for reuse across all
    requests.

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control is yielded while the app is running.
    """
    settings: OctolensSettings = app.state.settings

    app.state.github_client = GitHubClient(
        base_url=settings.github_api_url,
        timeout=settings.request_timeout,
        retry_attempts=settings.retry_attempts,
        retry_backoff=settings.retry_backoff,
    )

    try:
        app.state.chat_client = create_chat_client(
            settings.provider,
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            ollama_host=settings.ollama_host,
            timeout=settings.request_timeout,
            retry_attempts=settings.retry_attempts,
            retry_backoff=settings.retry_backoff,
        )
        logger.info(f"Initialized {settings.provider} chat client")
    except ConfigurationError as e:
        # Runs must then bring their own API_KEY
        app.state.chat_client = None
        logger.warning(f"No shared chat client: {e}")

    yield

    # Shutdown: Clean up resources
    if getattr(app.state, "chat_client", None) is not None:
        await app.state.chat_client.close()
        logger.info("Chat client closed")
    if hasattr(app.state, "github_client"):
        await app.state.github_client.close()
        logger.info("GitHub client closed")


def create_app(settings: OctolensSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional OctolensSettings instance. If not provided,
                  settings will be loaded from environment variables.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        from octolens.dependencies import get_settings

        settings = get_settings()

    app = FastAPI(
        title="octolens",
        description="Headless connector that lets LLM chats call read-only GitHub tools",
        version=__version__,
        lifespan=lifespan,
    )

    # Store settings in app.state for lifespan access
    app.state.settings = settings

    # Note: FastAPI's type hints for add_middleware are overly strict
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(tools.router)
    app.include_router(run.router)

    return app
