"""Business logic services for octolens.

This package contains the completion orchestrator that runs the two-phase
tool-call exchange and the mapper that turns its outcomes into output records.
"""

from octolens.services.orchestrator import CompletionOrchestrator, OrchestratorState
from octolens.services.response_mapper import (
    CompletionRecord,
    ConnectorErrorResponse,
    ConnectorResponse,
    PromptFailure,
    map_to_response,
)

__all__ = [
    "CompletionOrchestrator",
    "CompletionRecord",
    "ConnectorErrorResponse",
    "ConnectorResponse",
    "OrchestratorState",
    "PromptFailure",
    "map_to_response",
]
