"""Integration tests for the run API endpoint."""

from unittest.mock import patch

import pytest


@pytest.mark.asyncio
async def test_run_repository_question(
    async_client, run_payload, mock_chat_client, mock_github_client, make_reply, make_tool_call
):
    """Test a prompt answered through one GitHub tool call."""
    mock_github_client.add("/users/X/repos", [{"name": "repo1"}])
    mock_chat_client.script.extend(
        [
            make_reply(
                None,
                tool_calls=[make_tool_call("call_1", "getRepositoryData", username="X")],
            ),
            make_reply("X has repo1.", total_tokens=96),
        ]
    )

    response = await async_client.post(
        "/api/v1/run", json=run_payload("What repos does user X have?")
    )

    assert response.status_code == 200
    assert response.json() == {
        "Completions": [{"Content": "X has repo1.", "TokenUsage": 96}],
        "ModelType": "gpt-4o-mini-2024-07-18",
    }
    request = mock_github_client.requests[0]
    assert request.url.path == "/users/X/repos"
    assert request.headers["Authorization"] == "token ghp-configured"
    assert request.headers["Accept"] == "application/vnd.github.v3.diff"


@pytest.mark.asyncio
async def test_run_empty_batch(async_client, run_payload, mock_chat_client):
    """Test that an empty prompt list returns no completions."""
    response = await async_client.post("/api/v1/run", json=run_payload())

    assert response.status_code == 200
    assert response.json() == {"Completions": [], "ModelType": "gpt-4o-mini"}
    assert mock_chat_client.requests == []


@pytest.mark.asyncio
async def test_run_partial_failure(
    async_client, run_payload, mock_chat_client, mock_github_client, make_reply, make_tool_call
):
    """Test that a failed prompt is reported in its own record."""
    mock_chat_client.script.extend(
        [
            make_reply(None, tool_calls=[make_tool_call("c1", "getUserData", username="ghost")]),
            make_reply("Hello!", total_tokens=7),
        ]
    )

    response = await async_client.post(
        "/api/v1/run", json=run_payload("Who is ghost?", "Say hello")
    )

    assert response.status_code == 200
    assert response.json()["Completions"] == [
        {"Content": None, "Error": "GitHub API request failed: Not Found"},
        {"Content": "Hello!", "TokenUsage": 7},
    ]


@pytest.mark.asyncio
async def test_run_missing_github_token(async_client, test_settings, run_payload):
    """Test that a missing GitHub token fails the run in the response body."""
    test_settings.github_token = None

    response = await async_client.post("/api/v1/run", json=run_payload("Hi"))

    assert response.status_code == 200
    assert response.json() == {
        "Error": "Missing GitHub access token (GH_TOKEN)",
        "ModelType": "gpt-4o-mini",
    }


@pytest.mark.asyncio
async def test_run_with_per_request_credentials(
    async_client,
    run_payload,
    mock_chat_client,
    mock_github_client,
    make_chat_client,
    make_reply,
    make_tool_call,
):
    """Test that per-request API_KEY and GH_TOKEN are used for the run."""
    mock_github_client.add("/users/octocat", {"login": "octocat"})
    per_run_client = make_chat_client(
        [
            make_reply(None, tool_calls=[make_tool_call("c1", "getUserData", username="octocat")]),
            make_reply("octocat is GitHub's mascot."),
        ]
    )

    with patch(
        "octolens.connector.create_chat_client", return_value=per_run_client
    ) as mock_create:
        response = await async_client.post(
            "/api/v1/run",
            json=run_payload(
                "Who is octocat?",
                settings={"API_KEY": "sk-per-run", "GH_TOKEN": "ghp-per-run"},
            ),
        )

    assert response.status_code == 200
    assert response.json()["Completions"][0]["Content"] == "octocat is GitHub's mascot."
    assert mock_create.call_args.kwargs["api_key"] == "sk-per-run"
    assert per_run_client.closed is True
    assert mock_chat_client.requests == []
    assert mock_github_client.requests[0].headers["Authorization"] == "token ghp-per-run"


@pytest.mark.asyncio
async def test_run_with_properties(async_client, run_payload, mock_chat_client, make_reply):
    """Test that properties reach the model request."""
    mock_chat_client.script.append(make_reply("Meow."))

    response = await async_client.post(
        "/api/v1/run",
        json=run_payload(
            "Hi", properties={"prompt": "Answer like a cat.", "temperature": 0.5}
        ),
    )

    assert response.status_code == 200
    request = mock_chat_client.requests[0]
    assert request["messages"][0].content == "Answer like a cat."
    assert request["options"] == {"temperature": 0.5}


@pytest.mark.asyncio
async def test_run_invalid_body(async_client):
    """Test that malformed request bodies are rejected."""
    response = await async_client.post("/api/v1/run", json={"prompts": "not a list"})

    assert response.status_code == 422
