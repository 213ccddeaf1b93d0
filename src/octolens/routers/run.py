"""Run API endpoint.

This module exposes the connector over HTTP: a batch of prompts in, one
output record per prompt out.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from octolens.config import OctolensSettings
from octolens.connector import API_KEY, run
from octolens.dependencies import get_app_settings, get_chat_client, get_github_client
from octolens.llm import ChatClient
from octolens.models.run import RunRequest, RunResponse
from octolens.tools import GitHubClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["run"])


@router.post("/run", response_model=RunResponse, response_model_exclude_unset=True)
async def run_prompts(
    request_body: RunRequest,
    settings: OctolensSettings = Depends(get_app_settings),
    chat_client: ChatClient | None = Depends(get_chat_client),
    github_client: GitHubClient = Depends(get_github_client),
) -> dict[str, Any]:
    """Answer a batch of prompts, letting the model call GitHub tools.

    Failures are reported in the body rather than as HTTP errors: a failed
    prompt carries Error in its record, and a run that could not start at all
    (for example, a missing credential) returns Error instead of Completions.

    Args:
        request_body: Model, prompts, properties and per-run credentials
        settings: Injected application settings
        chat_client: Injected shared chat client, if one exists
        github_client: Injected GitHub client

    Returns:
        The connector response as a RunResponse-shaped dict
    """
    # A per-run key gets its own provider client
    if request_body.settings.get(API_KEY):
        chat_client = None

    logger.info(f"Run request with {len(request_body.prompts)} prompt(s)")

    result = await run(
        request_body.model,
        request_body.prompts,
        request_body.properties,
        request_body.settings,
        config=settings,
        chat_client=chat_client,
        github=github_client,
        reset_transcript=request_body.reset_transcript,
    )
    return result.to_dict()
