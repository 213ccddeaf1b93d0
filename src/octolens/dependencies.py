"""Dependency injection providers for FastAPI endpoints.

This module provides FastAPI dependency functions that are used across
multiple routers to inject common dependencies like settings and clients.
"""

from functools import lru_cache

from fastapi import HTTPException, Request

from octolens.config import OctolensSettings
from octolens.llm import ChatClient
from octolens.tools import GitHubClient


@lru_cache
def get_settings() -> OctolensSettings:
    """Get the application settings instance.

    This function is cached so that the same settings instance is reused
    across all requests. Settings are loaded from environment variables
    with the OCTOLENS_ prefix.

    Returns:
        OctolensSettings: The application configuration settings.
    """
    return OctolensSettings()


def get_app_settings(request: Request) -> OctolensSettings:
    """Get the settings stored in app state.

    Using app.state instead of the cached get_settings() lets tests run
    with their own isolated settings.
    """
    return request.app.state.settings


def get_chat_client(request: Request) -> ChatClient | None:
    """Get the shared chat client from app state.

    Returns None when no client could be created at startup (for example,
    no provider key is configured); runs then need to supply their own
    API_KEY.

    Args:
        request: The FastAPI request object.

    Returns:
        ChatClient | None: The chat client instance, if one was created.
    """
    return getattr(request.app.state, "chat_client", None)


def get_github_client(request: Request) -> GitHubClient:
    """Get the GitHub client from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        GitHubClient: The GitHub client instance.

    Raises:
        HTTPException: If the GitHub client is not initialized (503 Service Unavailable).
    """
    if not hasattr(request.app.state, "github_client"):
        raise HTTPException(
            status_code=503,
            detail="GitHub client not initialized",
        )
    return request.app.state.github_client
