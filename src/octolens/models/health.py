"""Health check response model."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response model for the health check endpoint.

    Attributes:
        status: Health status indicator ("ok" or "error").
        version: The version of octolens.
        provider: The configured model provider.
        provider_connected: Whether the model provider is reachable, if a client exists.
        github_api_url: The GitHub API root used for tool calls.
    """

    status: str = Field(..., description="Health status of the service")
    version: str = Field(..., description="Version of octolens")
    provider: str = Field(..., description="Configured model provider")
    provider_connected: bool | None = Field(
        default=None,
        description="Whether the model provider is reachable (None if no shared client)",
    )
    github_api_url: str | None = Field(
        default=None,
        description="GitHub API root URL",
    )
