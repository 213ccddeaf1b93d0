"""Pydantic models for the run API request and response.

Response field names follow the connector's output shape (PascalCase:
Completions, ModelType, Content, Error, TokenUsage).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RunRequest(BaseModel):
    """Request body for POST /api/v1/run."""

    model: str | None = Field(
        default=None,
        description="Model name. Defaults to the configured default model.",
    )
    prompts: list[str] = Field(
        default_factory=list,
        description="Prompts to answer, processed in order.",
    )
    properties: dict[str, Any] = Field(
        default_factory=dict,
        description="Optional 'prompt' overriding the system prompt; other entries "
        "(temperature, etc.) are forwarded to the model request.",
    )
    settings: dict[str, str] = Field(
        default_factory=dict,
        description="Per-run credentials: API_KEY and GH_TOKEN. "
        "Missing entries fall back to server configuration.",
    )
    reset_transcript: bool | None = Field(
        default=None,
        description="Reset the transcript before each prompt instead of sharing it "
        "across the batch. Defaults to the server setting.",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "model": "gpt-4o-mini",
                    "prompts": ["What repos does octocat have?"],
                    "properties": {"temperature": 0.2},
                    "settings": {"API_KEY": "sk-...", "GH_TOKEN": "ghp_..."},
                }
            ]
        }
    )


class CompletionResponse(BaseModel):
    """The output record for one prompt."""

    Content: str | None = Field(default=None, description="The answer text")
    Error: str | None = Field(default=None, description="Error message, if the prompt failed")
    TokenUsage: int | None = Field(default=None, description="Total tokens used")


class RunResponse(BaseModel):
    """Response body for POST /api/v1/run.

    Either Completions (one record per prompt, in order) or Error is set.
    """

    Completions: list[CompletionResponse] | None = Field(
        default=None, description="One record per prompt, in input order"
    )
    Error: str | None = Field(
        default=None, description="Set when the run failed as a whole"
    )
    ModelType: str = Field(description="The model that produced the completions")
