"""Model provider clients.

This package provides async chat-completion clients for OpenAI and Ollama
behind one interface. All interactions are async and return a
provider-neutral CompletionResult.
"""

from octolens.llm.client import ChatClient, create_chat_client
from octolens.llm.types import CompletionResult

__all__ = ["ChatClient", "CompletionResult", "create_chat_client"]
