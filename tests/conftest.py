"""Pytest configuration and shared fixtures for octolens tests.

This module provides common fixtures used across all test modules,
including test app creation, async client setup, a scripted chat client
and a mocked GitHub API.
"""

import json
from typing import Any, Callable, Sequence
from unittest.mock import patch

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from octolens import create_app
from octolens.config import OctolensSettings
from octolens.llm import ChatClient, CompletionResult
from octolens.sessions import Message, ToolCallRequest
from octolens.tools import GitHubClient


class ScriptedChatClient(ChatClient):
    """Chat client that replays scripted results and records every request.

    Each scripted entry is either a CompletionResult to return or an
    exception to raise.
    """

    provider = "scripted"

    def __init__(self, script: Sequence[CompletionResult | Exception] = ()) -> None:
        self.script = list(script)
        self.requests: list[dict[str, Any]] = []
        self.closed = False

    async def complete(
        self,
        model: str,
        messages: Sequence[Message],
        tools: list[dict[str, Any]] | None = None,
        options: dict[str, Any] | None = None,
    ) -> CompletionResult:
        self.requests.append(
            {
                "model": model,
                "messages": list(messages),
                "tools": tools,
                "options": options,
            }
        )
        if not self.script:
            raise AssertionError("Unexpected completion request")
        entry = self.script.pop(0)
        if isinstance(entry, Exception):
            raise entry
        return entry

    async def check_connection(self) -> bool:
        return True

    async def close(self) -> None:
        self.closed = True


def reply(
    content: str | None = None,
    tool_calls: Sequence[ToolCallRequest] = (),
    total_tokens: int | None = 10,
    model: str = "gpt-4o-mini-2024-07-18",
) -> CompletionResult:
    """Build a CompletionResult for scripting."""
    return CompletionResult(
        content=content,
        model=model,
        tool_calls=tuple(tool_calls),
        total_tokens=total_tokens,
    )


def tool_call(call_id: str, name: str, **arguments: Any) -> ToolCallRequest:
    """Build a ToolCallRequest with JSON-serialized arguments."""
    return ToolCallRequest(id=call_id, name=name, arguments=json.dumps(arguments))


class GitHubStub:
    """Mock GitHub API: maps request paths to (status, JSON body) pairs."""

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, Any]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, path: str, body: Any, status_code: int = 200) -> None:
        self.routes[path] = (status_code, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code, body = self.routes.get(
            request.url.path, (404, {"message": "Not Found"})
        )
        return httpx.Response(status_code, json=body)

    def client(self, **kwargs: Any) -> GitHubClient:
        kwargs.setdefault("retry_backoff", 0)
        return GitHubClient(transport=httpx.MockTransport(self.handler), **kwargs)


@pytest.fixture
def github_stub() -> GitHubStub:
    """Create an empty mock GitHub API."""
    return GitHubStub()


@pytest.fixture
def make_chat_client() -> Callable[..., ScriptedChatClient]:
    """Factory for scripted chat clients."""
    return ScriptedChatClient


@pytest.fixture
def test_settings(tmp_path):
    """Create test settings with isolated credentials and no retry delays.

    Args:
        tmp_path: Pytest fixture providing a temporary directory.

    Returns:
        OctolensSettings: Settings instance configured for testing.
    """
    return OctolensSettings(
        host="127.0.0.1",
        port=8000,
        provider="openai",
        default_model="gpt-4o-mini",
        openai_api_key="sk-test",
        github_token="ghp-configured",
        github_api_url="https://api.github.test",
        retry_attempts=1,
        retry_backoff=0,
        log_level="DEBUG",
        cors_origins=["*"],
    )


@pytest.fixture
def test_app(test_settings):
    """Create a FastAPI test application instance.

    Args:
        test_settings: Test settings fixture.

    Returns:
        FastAPI: Configured test application.
    """
    return create_app(settings=test_settings)


@pytest_asyncio.fixture
async def async_client(test_app):
    """Create an async HTTP client for testing FastAPI endpoints.

    Args:
        test_app: Test application fixture.

    Yields:
        AsyncClient: Async HTTP client for making test requests.
    """
    # Trigger the lifespan startup manually for tests
    async with test_app.router.lifespan_context(test_app):
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client


@pytest.fixture
def make_reply() -> Callable[..., CompletionResult]:
    """Factory for scripted completion results."""
    return reply


@pytest.fixture
def make_tool_call() -> Callable[..., ToolCallRequest]:
    """Factory for tool-call requests."""
    return tool_call


@pytest.fixture(autouse=True)
def mock_chat_client():
    """Replace the app's provider client with a scripted one.

    The lifespan calls create_chat_client at startup; tests script the
    returned client's replies through this fixture.
    """
    client = ScriptedChatClient()
    with patch("octolens.app.create_chat_client", return_value=client):
        yield client


@pytest.fixture(autouse=True)
def mock_github_client(github_stub):
    """Route the app's GitHub client through the mock GitHub API."""
    with patch("octolens.app.GitHubClient", side_effect=github_stub.client):
        yield github_stub
