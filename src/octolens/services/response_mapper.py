"""Mapping of per-prompt outcomes to connector output records."""

from dataclasses import dataclass
from typing import Any, Sequence

from octolens.llm.types import CompletionResult


@dataclass(frozen=True)
class PromptFailure:
    """A captured error that ended one prompt's processing."""

    error: BaseException


Outcome = CompletionResult | PromptFailure


@dataclass(frozen=True)
class CompletionRecord:
    """The output record for one input prompt."""

    content: str | None
    token_usage: int | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"Content": self.content}
        if self.error is not None:
            data["Error"] = self.error
        if self.token_usage is not None:
            data["TokenUsage"] = self.token_usage
        return data


@dataclass(frozen=True)
class ConnectorResponse:
    """The result of a run: one record per prompt, in input order."""

    completions: tuple[CompletionRecord, ...]
    model_type: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "Completions": [record.to_dict() for record in self.completions],
            "ModelType": self.model_type,
        }


@dataclass(frozen=True)
class ConnectorErrorResponse:
    """The result of a run that failed before or outside the prompt loop."""

    error: str
    model_type: str

    def to_dict(self) -> dict[str, Any]:
        return {"Error": self.error, "ModelType": self.model_type}


def error_message(error: BaseException) -> str:
    """Render an error as the text carried in an output record.

    Falls back to the exception class name when the error has no message.
    """
    return str(error) or type(error).__name__


def map_outcome(outcome: Outcome) -> CompletionRecord:
    """Convert a single outcome into its output record."""
    if isinstance(outcome, PromptFailure):
        return CompletionRecord(content=None, error=error_message(outcome.error))
    return CompletionRecord(content=outcome.content, token_usage=outcome.total_tokens)


def map_to_response(outcomes: Sequence[Outcome], model: str) -> ConnectorResponse:
    """Convert the ordered per-prompt outcomes into a ConnectorResponse.

    Args:
        outcomes: One outcome per input prompt, in input order
        model: The requested model name

    Returns:
        ConnectorResponse: Records in input order, tagged with the model echoed by
            the first successful completion, or the requested model if none succeeded
    """
    model_type = next(
        (
            outcome.model
            for outcome in outcomes
            if isinstance(outcome, CompletionResult) and outcome.model
        ),
        model,
    )
    return ConnectorResponse(
        completions=tuple(map_outcome(outcome) for outcome in outcomes),
        model_type=model_type,
    )
