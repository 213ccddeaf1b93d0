"""Pytest configuration for integration tests.

The shared app fixtures already route the provider client and GitHub
through scripted mocks; this module adds request helpers for the run API.
"""

from typing import Any

import pytest


@pytest.fixture
def run_payload():
    """Factory for POST /api/v1/run bodies."""

    def _payload(*prompts: str, **overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {"model": "gpt-4o-mini", "prompts": list(prompts)}
        payload.update(overrides)
        return payload

    return _payload
