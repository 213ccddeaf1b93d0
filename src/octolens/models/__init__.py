"""Pydantic models for API request and response schemas.

This package contains all Pydantic models used for validating and
serializing API requests and responses across all endpoints.
"""

from octolens.models.health import HealthResponse
from octolens.models.run import CompletionResponse, RunRequest, RunResponse
from octolens.models.tools import ToolListResponse, ToolResponse

__all__ = [
    "CompletionResponse",
    "HealthResponse",
    "RunRequest",
    "RunResponse",
    "ToolListResponse",
    "ToolResponse",
]
