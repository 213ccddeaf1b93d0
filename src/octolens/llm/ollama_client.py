"""Async Ollama chat client.

This module wraps ollama.AsyncClient for local models that support tool
calling. Ollama does not assign ids to tool calls, so the client generates
them to keep tool results correlated in the transcript.
"""

import json
import logging
import uuid
from typing import Any, Sequence

import ollama

from octolens.llm.client import ChatClient
from octolens.llm.types import CompletionResult
from octolens.retry import retrying
from octolens.sessions.types import AssistantMessage, Message, ToolCallRequest, ToolMessage

logger = logging.getLogger(__name__)


def _get_value(obj: Any, key: str, default: Any = None) -> Any:
    """Get a value from either an object attribute or a dict key."""
    if isinstance(obj, dict):
        return obj.get(key, default)
    return getattr(obj, key, default)


def _decode_arguments(arguments: str) -> dict[str, Any]:
    try:
        decoded = json.loads(arguments or "{}")
    except json.JSONDecodeError:
        return {}
    return decoded if isinstance(decoded, dict) else {}


def to_ollama_messages(messages: Sequence[Message]) -> list[dict[str, Any]]:
    """Convert transcript messages to Ollama chat format.

    Args:
        messages: Transcript messages, system message first

    Returns:
        List of message dicts in Ollama format
    """
    ollama_messages: list[dict[str, Any]] = []

    for msg in messages:
        ollama_msg: dict[str, Any] = {"role": msg.role, "content": msg.content or ""}

        if isinstance(msg, AssistantMessage) and msg.tool_calls:
            ollama_msg["tool_calls"] = [
                {
                    "function": {
                        "name": call.name,
                        "arguments": _decode_arguments(call.arguments),
                    }
                }
                for call in msg.tool_calls
            ]
        elif isinstance(msg, ToolMessage):
            ollama_msg["tool_name"] = msg.name

        ollama_messages.append(ollama_msg)

    return ollama_messages


class OllamaChatClient(ChatClient):
    """Chat client for a local Ollama server.

    Attributes:
        host: The Ollama server URL (e.g., "http://localhost:11434")
        _client: The underlying ollama.AsyncClient instance
    """

    provider = "ollama"

    def __init__(
        self,
        host: str,
        timeout: float = 30.0,
        retry_attempts: int = 1,
        retry_backoff: float = 0.5,
    ) -> None:
        self.host = host
        self.retry_attempts = retry_attempts
        self.retry_backoff = retry_backoff
        self._client = ollama.AsyncClient(host=host, timeout=timeout)
        logger.info(f"OllamaChatClient initialized with host: {host}")

    async def complete(
        self,
        model: str,
        messages: Sequence[Message],
        tools: list[dict[str, Any]] | None = None,
        options: dict[str, Any] | None = None,
    ) -> CompletionResult:
        logger.debug(f"Requesting completion from {model} with {len(messages)} messages")

        async for attempt in retrying(self.retry_attempts, self.retry_backoff):
            with attempt:
                response = await self._client.chat(
                    model=model,
                    messages=to_ollama_messages(messages),
                    tools=tools or None,
                    options=options or None,
                    stream=False,
                )

        message = _get_value(response, "message", {})
        tool_calls = tuple(
            ToolCallRequest(
                id=f"call_{uuid.uuid4().hex[:10]}",
                name=_get_value(_get_value(call, "function"), "name", ""),
                arguments=json.dumps(
                    dict(_get_value(_get_value(call, "function"), "arguments", None) or {})
                ),
            )
            for call in (_get_value(message, "tool_calls") or [])
        )

        prompt_tokens = _get_value(response, "prompt_eval_count")
        eval_tokens = _get_value(response, "eval_count")
        total_tokens = None
        if prompt_tokens is not None or eval_tokens is not None:
            total_tokens = (prompt_tokens or 0) + (eval_tokens or 0)

        return CompletionResult(
            content=_get_value(message, "content"),
            model=_get_value(response, "model") or model,
            tool_calls=tool_calls,
            total_tokens=total_tokens,
        )

    async def check_connection(self) -> bool:
        """Check if the Ollama server is reachable.

        Returns:
            bool: True if connection is successful, False otherwise
        """
        try:
            await self._client.list()
            logger.debug("Ollama connection check: successful")
            return True
        except Exception as e:
            logger.warning(f"Ollama connection check failed: {e}")
            return False
