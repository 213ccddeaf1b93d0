"""Pydantic models for the tool catalog endpoint."""

from typing import Any

from pydantic import BaseModel, Field


class ToolResponse(BaseModel):
    """A single tool as offered to the model."""

    name: str = Field(description="Function name")
    description: str = Field(description="What the tool does")
    parameters: dict[str, Any] = Field(description="JSON schema of the parameters")


class ToolListResponse(BaseModel):
    """Response body for GET /api/v1/tools."""

    tools: list[ToolResponse] = Field(default_factory=list)
