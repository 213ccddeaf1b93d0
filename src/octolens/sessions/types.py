"""Data types for the conversation transcript.

This module defines the message structures that make up a transcript and
the tool-call requests carried by assistant messages.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ToolCallRequest:
    """A model-declared request to invoke a tool.

    Attributes:
        id: Correlation token, echoed back in the answering tool message
        name: The requested function name
        arguments: The arguments as serialized JSON text
    """

    id: str
    name: str
    arguments: str = "{}"


@dataclass
class UserMessage:
    """A prompt from the user."""

    role: str = "user"
    content: str = ""

    def __post_init__(self) -> None:
        """Validate role is always 'user'."""
        self.role = "user"


@dataclass
class SystemMessage:
    """The system prompt that opens every transcript."""

    role: str = "system"
    content: str = ""

    def __post_init__(self) -> None:
        """Validate role is always 'system'."""
        self.role = "system"


@dataclass
class AssistantMessage:
    """A reply from the model, possibly carrying tool-call requests."""

    role: str = "assistant"
    content: str | None = ""
    model: str = ""
    tool_calls: list[ToolCallRequest] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate role is always 'assistant'."""
        self.role = "assistant"


@dataclass
class ToolMessage:
    """A tool result, correlated to the request it answers."""

    role: str = "tool"
    content: str = ""
    tool_call_id: str = ""
    name: str = ""

    def __post_init__(self) -> None:
        """Validate role is always 'tool'."""
        self.role = "tool"


# Union type for all message types
Message = UserMessage | SystemMessage | AssistantMessage | ToolMessage
