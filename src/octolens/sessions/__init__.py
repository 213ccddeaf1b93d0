"""Conversation state for octolens runs.

This package provides the transcript that holds a run's ordered messages
and the message types it is made of.
"""

from octolens.sessions.transcript import Transcript
from octolens.sessions.types import (
    AssistantMessage,
    Message,
    SystemMessage,
    ToolCallRequest,
    ToolMessage,
    UserMessage,
)

__all__ = [
    # Core classes
    "Transcript",
    # Message types
    "Message",
    "UserMessage",
    "SystemMessage",
    "AssistantMessage",
    "ToolMessage",
    "ToolCallRequest",
]
