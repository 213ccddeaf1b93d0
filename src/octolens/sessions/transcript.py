"""Transcript class for holding one run's conversation state.

This module provides the Transcript class which handles:
- Opening the conversation with exactly one system message
- Appending user, assistant and tool messages in order
- Producing immutable snapshots for model requests
- Saving the transcript to a JSON file when persistence is enabled
"""

import json
import logging
import uuid
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from octolens.sessions.types import Message, SystemMessage, ToolMessage

logger = logging.getLogger(__name__)


class Transcript:
    """The ordered message sequence sent with each model request.

    A transcript always begins with a single system message. Messages are
    only ever appended; the transcript is persisted as a JSON file with the
    following structure:
    {
        "metadata": {...},
        "messages": [...]
    }
    """

    def __init__(self, system_prompt: str, model: str = "") -> None:
        """Initialize a Transcript.

        Args:
            system_prompt: Content of the opening system message
            model: The model name used for this run
        """
        self.transcript_id = Transcript.generate_transcript_id()
        self.model = model
        self.created_at = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        self._messages: list[Message] = [SystemMessage(content=system_prompt)]
        # Messages dropped by reset, kept for the saved run log
        self._archived: list[Message] = []

    def __len__(self) -> int:
        return len(self._messages)

    @property
    def system_prompt(self) -> str:
        """The content of the opening system message."""
        return self._messages[0].content or ""

    def append(self, message: Message) -> None:
        """Append a message to the transcript.

        Args:
            message: The message to add

        Raises:
            ValueError: If a second system message is appended, or a tool
                message lacks its correlation id or tool name
        """
        if isinstance(message, SystemMessage):
            raise ValueError("Transcript already has a system message")
        if isinstance(message, ToolMessage) and not (message.tool_call_id and message.name):
            raise ValueError("Tool messages require a tool_call_id and a name")
        self._messages.append(message)

    def snapshot(self) -> tuple[Message, ...]:
        """Get the full ordered transcript as it stands now."""
        return tuple(self._messages)

    def reset(self) -> None:
        """Drop everything after the system message from the model window.

        Dropped messages are archived, so to_dict() and save() still cover
        the whole run.
        """
        self._archived.extend(self._messages[1:])
        del self._messages[1:]
        logger.debug(f"Reset transcript {self.transcript_id} to its system message")

    def history(self) -> list[Message]:
        """Get every message of the run, including those dropped by reset."""
        return [self._messages[0], *self._archived, *self._messages[1:]]

    def to_dict(self) -> dict[str, Any]:
        """Convert the full run history to a dictionary for JSON serialization.

        Returns:
            Dictionary representation of the transcript
        """
        messages = self.history()
        return {
            "metadata": {
                "transcript_id": self.transcript_id,
                "model": self.model,
                "created_at": self.created_at,
                "message_count": len(messages),
            },
            "messages": [asdict(msg) for msg in messages],
        }

    def save(self, transcripts_dir: Path) -> Path:
        """Save the transcript to a JSON file.

        Args:
            transcripts_dir: Directory where transcript files are stored

        Returns:
            Path: The written file
        """
        transcripts_dir.mkdir(parents=True, exist_ok=True)
        file_path = transcripts_dir / f"{self.transcript_id}.json"

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

        logger.debug(f"Saved transcript {self.transcript_id} to {file_path}")
        return file_path

    @staticmethod
    def generate_transcript_id() -> str:
        """Generate a new unique transcript ID.

        Returns:
            10-character hexadecimal string
        """
        return uuid.uuid4().hex[:10]
