"""Type definitions for model provider integration.

This module contains the provider-neutral shape every chat client returns,
so the orchestrator never deals with SDK response objects directly.
"""

from dataclasses import dataclass, field

from octolens.sessions.types import ToolCallRequest


@dataclass(frozen=True)
class CompletionResult:
    """One chat completion, normalized across providers.

    Attributes:
        content: The reply text (None when the reply is tool calls only)
        model: The model name echoed by the provider
        tool_calls: Tool-call requests in the order the model made them
        total_tokens: Total token usage, if the provider reported it
    """

    content: str | None
    model: str
    tool_calls: tuple[ToolCallRequest, ...] = field(default_factory=tuple)
    total_tokens: int | None = None
