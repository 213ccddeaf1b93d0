"""Async OpenAI chat client.

This module wraps openai.AsyncOpenAI and converts transcript messages to and
from the chat-completions wire format.
"""

import logging
from typing import Any, Sequence

import openai

from octolens.llm.client import ChatClient
from octolens.llm.types import CompletionResult
from octolens.retry import retrying
from octolens.sessions.types import AssistantMessage, Message, ToolCallRequest, ToolMessage

logger = logging.getLogger(__name__)


def to_openai_messages(messages: Sequence[Message]) -> list[dict[str, Any]]:
    """Convert transcript messages to OpenAI chat-completions format.

    Args:
        messages: Transcript messages, system message first

    Returns:
        List of message dicts: [{"role": "...", "content": "..."}, ...]
    """
    openai_messages: list[dict[str, Any]] = []

    for msg in messages:
        openai_msg: dict[str, Any] = {"role": msg.role, "content": msg.content}

        if isinstance(msg, AssistantMessage) and msg.tool_calls:
            openai_msg["tool_calls"] = [
                {
                    "id": call.id,
                    "type": "function",
                    "function": {"name": call.name, "arguments": call.arguments},
                }
                for call in msg.tool_calls
            ]
        elif isinstance(msg, ToolMessage):
            openai_msg["tool_call_id"] = msg.tool_call_id

        openai_messages.append(openai_msg)

    return openai_messages


class OpenAIChatClient(ChatClient):
    """Chat client for the OpenAI chat-completions API.

    Attributes:
        _client: The underlying openai.AsyncOpenAI instance
    """

    provider = "openai"

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        timeout: float = 30.0,
        retry_attempts: int = 1,
        retry_backoff: float = 0.5,
    ) -> None:
        """Initialize the OpenAI client.

        SDK-level retries are disabled; retries follow the octolens policy.
        """
        self.retry_attempts = retry_attempts
        self.retry_backoff = retry_backoff
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
        )
        logger.info("OpenAIChatClient initialized")

    async def complete(
        self,
        model: str,
        messages: Sequence[Message],
        tools: list[dict[str, Any]] | None = None,
        options: dict[str, Any] | None = None,
    ) -> CompletionResult:
        request: dict[str, Any] = {
            "model": model,
            "messages": to_openai_messages(messages),
        }
        if tools:
            request["tools"] = tools
            request["tool_choice"] = "auto"
        request.update(options or {})

        logger.debug(
            f"Requesting completion from {model} with {len(messages)} messages, "
            f"tools={'yes' if tools else 'no'}"
        )

        async for attempt in retrying(self.retry_attempts, self.retry_backoff):
            with attempt:
                completion = await self._client.chat.completions.create(**request)

        message = completion.choices[0].message
        tool_calls = tuple(
            ToolCallRequest(
                id=call.id,
                name=call.function.name,
                arguments=call.function.arguments or "{}",
            )
            for call in (message.tool_calls or [])
        )

        return CompletionResult(
            content=message.content,
            model=completion.model or model,
            tool_calls=tool_calls,
            total_tokens=completion.usage.total_tokens if completion.usage else None,
        )

    async def check_connection(self) -> bool:
        """Check if the OpenAI API is reachable with the configured key.

        Returns:
            bool: True if connection is successful, False otherwise
        """
        try:
            await self._client.models.list()
            logger.debug("OpenAI connection check: successful")
            return True
        except Exception as e:
            logger.warning(f"OpenAI connection check failed: {e}")
            return False

    async def close(self) -> None:
        await self._client.close()
        await super().close()
