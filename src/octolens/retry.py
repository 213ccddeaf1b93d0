"""Retry policy for network-bound steps.

Model requests and GitHub fetches get at most ``retry_attempts`` extra tries
with exponential backoff, and only for transient failures: connection
problems, timeouts and 5xx answers. Client errors (4xx) are never retried.
"""

import asyncio
import logging

import httpx
import ollama
import openai
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from octolens.errors import GitHubAPIError

logger = logging.getLogger(__name__)


def is_transient_error(error: BaseException) -> bool:
    """Decide whether a failed network step is worth one more try.

    Args:
        error: The exception raised by the step

    Returns:
        bool: True for connection errors, timeouts and server-side (5xx) failures
    """
    if isinstance(error, GitHubAPIError):
        return error.status_code >= 500
    if isinstance(error, (openai.APIConnectionError, openai.InternalServerError)):
        return True
    if isinstance(error, ollama.ResponseError):
        return error.status_code >= 500
    if isinstance(error, (httpx.TransportError, ConnectionError, asyncio.TimeoutError)):
        return True
    return False


def retrying(attempts: int, backoff: float) -> AsyncRetrying:
    """Build the retry controller used around a single network step.

    Usage:
        async for attempt in retrying(1, 0.5):
            with attempt:
                response = await fetch()

    Args:
        attempts: Number of retries after the first try
        backoff: Base delay in seconds, doubled on each retry

    Returns:
        AsyncRetrying: A tenacity controller that re-raises the last error
    """
    return AsyncRetrying(
        stop=stop_after_attempt(attempts + 1),
        wait=wait_exponential(multiplier=backoff, max=30),
        retry=retry_if_exception(is_transient_error),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
