"""Unit tests for mapping outcomes to connector output records."""

from octolens.errors import GitHubAPIError
from octolens.services import ConnectorErrorResponse, PromptFailure, map_to_response


def test_success_and_failure_records(make_reply):
    """Test record shape for successful and failed prompts, in order."""
    outcomes = [
        make_reply("first", total_tokens=12),
        PromptFailure(GitHubAPIError(404, "Not Found")),
        make_reply("third", total_tokens=30),
    ]

    response = map_to_response(outcomes, "gpt-4o-mini")

    assert response.to_dict()["Completions"] == [
        {"Content": "first", "TokenUsage": 12},
        {"Content": None, "Error": "GitHub API request failed: Not Found"},
        {"Content": "third", "TokenUsage": 30},
    ]


def test_model_type_from_first_success(make_reply):
    """Test that the echoed model of the first success tags the run."""
    outcomes = [
        PromptFailure(RuntimeError("boom")),
        make_reply("ok", model="gpt-4o-mini-2024-07-18"),
        make_reply("ok", model="other"),
    ]

    response = map_to_response(outcomes, "gpt-4o-mini")

    assert response.model_type == "gpt-4o-mini-2024-07-18"


def test_model_type_falls_back_to_requested_model():
    """Test the fallback when nothing succeeded or the batch was empty."""
    assert map_to_response([], "gpt-4o-mini").model_type == "gpt-4o-mini"
    failed = map_to_response([PromptFailure(RuntimeError("x"))], "gpt-4o-mini")
    assert failed.model_type == "gpt-4o-mini"


def test_empty_batch():
    """Test that an empty batch maps to an empty completions list."""
    assert map_to_response([], "m").to_dict() == {"Completions": [], "ModelType": "m"}


def test_error_without_message_uses_class_name():
    """Test that message-less errors still produce readable text."""
    response = map_to_response([PromptFailure(TimeoutError())], "m")

    assert response.completions[0].error == "TimeoutError"


def test_missing_usage_is_omitted(make_reply):
    """Test that TokenUsage is left out when the provider reported none."""
    response = map_to_response([make_reply("hi", total_tokens=None)], "m")

    assert response.to_dict()["Completions"] == [{"Content": "hi"}]


def test_error_response_shape():
    """Test the run-level error record."""
    error = ConnectorErrorResponse(error="Missing GitHub access token (GH_TOKEN)", model_type="m")

    assert error.to_dict() == {
        "Error": "Missing GitHub access token (GH_TOKEN)",
        "ModelType": "m",
    }
