"""Health check endpoint router."""

import logging

from fastapi import APIRouter, Request

from octolens import __version__
from octolens.llm import ChatClient
from octolens.models.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint.

    Returns the current health status and version of octolens.
    Also checks connectivity to the model provider if a shared client exists.

    Args:
        request: The FastAPI request object.

    Returns:
        HealthResponse: Health status and version information.
    """
    settings = request.app.state.settings
    provider_connected = None

    chat_client: ChatClient | None = getattr(request.app.state, "chat_client", None)
    if chat_client is not None:
        try:
            provider_connected = await chat_client.check_connection()
            logger.debug(f"Provider connectivity check: {provider_connected}")
        except Exception as e:
            logger.warning(f"Provider connectivity check failed: {e}")
            provider_connected = False

    return HealthResponse(
        status="ok",
        version=__version__,
        provider=settings.provider,
        provider_connected=provider_connected,
        github_api_url=settings.github_api_url,
    )
