"""Common interface for model provider clients.

Every provider client accepts transcript messages, an optional tool catalog
and pass-through options, and returns a CompletionResult. Clients are
created once at startup (or once per connector run) and reused.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Sequence

from octolens.errors import ConfigurationError
from octolens.llm.types import CompletionResult
from octolens.sessions.types import Message

logger = logging.getLogger(__name__)


class ChatClient(ABC):
    """Async chat-completion client for one model provider."""

    provider: str = ""

    @abstractmethod
    async def complete(
        self,
        model: str,
        messages: Sequence[Message],
        tools: list[dict[str, Any]] | None = None,
        options: dict[str, Any] | None = None,
    ) -> CompletionResult:
        """Request one chat completion.

        Args:
            model: The model name to use
            messages: The full transcript, system message first
            tools: Tool specs to offer; when given the model may choose freely
                   among them (tool choice "auto")
            options: Completion options forwarded verbatim (temperature, etc.)

        Returns:
            CompletionResult: The normalized reply
        """

    @abstractmethod
    async def check_connection(self) -> bool:
        """Check if the provider is reachable."""

    async def close(self) -> None:
        """Close the client and clean up resources."""
        logger.debug(f"{type(self).__name__} closed")


def create_chat_client(
    provider: str,
    *,
    api_key: str | None = None,
    base_url: str | None = None,
    ollama_host: str = "http://localhost:11434",
    timeout: float = 30.0,
    retry_attempts: int = 1,
    retry_backoff: float = 0.5,
) -> ChatClient:
    """Create the chat client for the configured provider.

    Args:
        provider: "openai" or "ollama"
        api_key: Provider API key (required for openai)
        base_url: Optional OpenAI-compatible base URL
        ollama_host: The Ollama server URL
        timeout: Deadline in seconds for each request
        retry_attempts: Extra tries for transient failures
        retry_backoff: Base backoff delay in seconds

    Returns:
        ChatClient: The client instance

    Raises:
        ConfigurationError: If the provider is unknown or its key is missing
    """
    if provider == "openai":
        if not api_key:
            raise ConfigurationError("Missing model provider API key (API_KEY)")
        from octolens.llm.openai_client import OpenAIChatClient

        return OpenAIChatClient(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            retry_attempts=retry_attempts,
            retry_backoff=retry_backoff,
        )
    if provider == "ollama":
        from octolens.llm.ollama_client import OllamaChatClient

        return OllamaChatClient(
            host=ollama_host,
            timeout=timeout,
            retry_attempts=retry_attempts,
            retry_backoff=retry_backoff,
        )
    raise ConfigurationError(f"Unknown model provider: {provider}")
