"""Connector entry point: run a batch of prompts with GitHub tools.

``run`` is the inbound call contract. It resolves credentials, opens a fresh
transcript with the system prompt, drives the orchestrator over the batch and
maps the outcomes to output records. Per-prompt failures become failed
records; anything that fails outside the prompt loop (such as a missing
credential) turns the whole run into a ConnectorErrorResponse. ``run`` never
raises.
"""

import logging
from typing import Any, Mapping, Sequence

from octolens.config import OctolensSettings
from octolens.errors import ConfigurationError
from octolens.llm.client import ChatClient, create_chat_client
from octolens.services.orchestrator import CompletionOrchestrator
from octolens.services.response_mapper import (
    ConnectorErrorResponse,
    ConnectorResponse,
    error_message,
    map_to_response,
)
from octolens.sessions.transcript import Transcript
from octolens.tools.executor import ToolExecutor
from octolens.tools.github import GitHubClient

logger = logging.getLogger(__name__)

API_KEY = "API_KEY"
GH_TOKEN = "GH_TOKEN"
SYSTEM_PROMPT_PROPERTY = "prompt"


async def run(
    model: str | None,
    prompts: Sequence[str],
    properties: Mapping[str, Any] | None = None,
    settings: Mapping[str, Any] | None = None,
    *,
    config: OctolensSettings | None = None,
    chat_client: ChatClient | None = None,
    github: GitHubClient | None = None,
    reset_transcript: bool | None = None,
) -> ConnectorResponse | ConnectorErrorResponse:
    """Run a batch of prompts through the tool-calling exchange.

    Args:
        model: The model name (falls back to the configured default model)
        prompts: The user prompts, processed in order
        properties: Optional "prompt" overriding the system prompt; every other
                    entry is forwarded verbatim to the completion requests
        settings: Per-run credentials: "API_KEY" (model provider) and
                  "GH_TOKEN" (GitHub). Missing entries fall back to config.
        config: Application settings (loaded from the environment if omitted)
        chat_client: Optional client to reuse instead of creating one for this run
        github: Optional GitHub client to reuse instead of creating one for this run
        reset_transcript: Reset the transcript before each prompt; defaults to
                          the reset_transcript_per_prompt setting

    Returns:
        ConnectorResponse with one record per prompt, or ConnectorErrorResponse
        if the run could not be carried out
    """
    if config is None:
        from octolens.dependencies import get_settings

        config = get_settings()

    requested_model = model or config.default_model
    run_settings = dict(settings or {})
    owned_clients: list[ChatClient | GitHubClient] = []

    try:
        github_token = run_settings.get(GH_TOKEN) or config.github_token
        if not github_token:
            raise ConfigurationError("Missing GitHub access token (GH_TOKEN)")

        if chat_client is None:
            chat_client = create_chat_client(
                config.provider,
                api_key=run_settings.get(API_KEY) or config.openai_api_key,
                base_url=config.openai_base_url,
                ollama_host=config.ollama_host,
                timeout=config.request_timeout,
                retry_attempts=config.retry_attempts,
                retry_backoff=config.retry_backoff,
            )
            owned_clients.append(chat_client)

        if github is None:
            github = GitHubClient(
                base_url=config.github_api_url,
                timeout=config.request_timeout,
                retry_attempts=config.retry_attempts,
                retry_backoff=config.retry_backoff,
            )
            owned_clients.append(github)

        options = dict(properties or {})
        system_prompt = options.pop(SYSTEM_PROMPT_PROPERTY, None) or config.system_prompt
        transcript = Transcript(system_prompt=str(system_prompt), model=requested_model)

        orchestrator = CompletionOrchestrator(
            chat_client=chat_client,
            executor=ToolExecutor(github, github_token),
            model=requested_model,
            options=options,
            reset_transcript_per_prompt=(
                config.reset_transcript_per_prompt
                if reset_transcript is None
                else reset_transcript
            ),
        )

        logger.info(f"Running {len(prompts)} prompt(s) with model {requested_model}")
        outcomes = await orchestrator.run_batch(transcript, prompts)

        transcripts_dir = config.resolved_transcripts_dir
        if transcripts_dir is not None:
            try:
                transcript.save(transcripts_dir)
            except OSError as e:
                logger.error(f"Failed to save transcript {transcript.transcript_id}: {e}")

        return map_to_response(outcomes, requested_model)

    except Exception as e:
        logger.error(f"Run failed: {e}")
        return ConnectorErrorResponse(error=error_message(e), model_type=requested_model)

    finally:
        for client in owned_clients:
            try:
                await client.close()
            except Exception as e:
                logger.warning(f"Failed to close {type(client).__name__}: {e}")
