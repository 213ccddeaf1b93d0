"""Async GitHub REST client behind the four lookup tools.

Every operation is a single GET against a fixed endpoint template. The
parsed JSON body is re-serialized to text, since the result goes straight
into the conversation transcript.
"""

import json
import logging
from urllib.parse import quote

import httpx

from octolens.errors import GitHubAPIError
from octolens.retry import retrying

logger = logging.getLogger(__name__)

# GitHub answers the JSON endpoints regardless of the diff media type.
_ACCEPT = "application/vnd.github.v3.diff"


def _segment(value: object) -> str:
    """Quote a value for use as a single URL path segment."""
    return quote(str(value), safe="")


class GitHubClient:
    """Async client for the read-only GitHub endpoints used as tools.

    The client is created once (per app or per run) and reused; the
    access token is passed per call by the tool executor.

    Attributes:
        base_url: The GitHub API root (e.g., "https://api.github.com")
        _client: The underlying httpx.AsyncClient instance
    """

    def __init__(
        self,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        retry_attempts: int = 1,
        retry_backoff: float = 0.5,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the GitHub client.

        Args:
            base_url: The GitHub API root URL
            timeout: Deadline in seconds for each request
            retry_attempts: Extra tries for transient failures
            retry_backoff: Base backoff delay in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.retry_attempts = retry_attempts
        self.retry_backoff = retry_backoff
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )
        logger.info(f"GitHubClient initialized with base URL: {self.base_url}")

    async def _get(self, path: str, token: str) -> str:
        headers = {
            "Authorization": f"token {token}",
            "Accept": _ACCEPT,
        }
        async for attempt in retrying(self.retry_attempts, self.retry_backoff):
            with attempt:
                response = await self._client.get(path, headers=headers)
                if not response.is_success:
                    raise GitHubAPIError(
                        response.status_code,
                        response.reason_phrase or str(response.status_code),
                    )

        logger.debug(f"GET {path} -> {response.status_code}")
        return json.dumps(response.json(), ensure_ascii=False)

    async def get_user_data(self, token: str, username: str) -> str:
        """Fetch a user's public profile."""
        return await self._get(f"/users/{_segment(username)}", token)

    async def get_repository_data(self, token: str, username: str) -> str:
        """Fetch the repositories owned by a user."""
        return await self._get(f"/users/{_segment(username)}/repos", token)

    async def get_commit_history(self, token: str, username: str, repo_name: str) -> str:
        """Fetch the commit history of a repository."""
        return await self._get(
            f"/repos/{_segment(username)}/{_segment(repo_name)}/commits", token
        )

    async def get_pull_request_diff(
        self, token: str, username: str, repo_name: str, pull_request_number: int
    ) -> str:
        """Fetch the changed files of a pull request, including their patches."""
        return await self._get(
            f"/repos/{_segment(username)}/{_segment(repo_name)}"
            f"/pulls/{_segment(pull_request_number)}/files",
            token,
        )

    async def check_connection(self) -> bool:
        """Check if the GitHub API is reachable.

        Returns:
            bool: True if the API root answered, False otherwise
        """
        try:
            response = await self._client.get("/")
            logger.debug(f"GitHub connection check: {response.status_code}")
            return response.status_code < 500
        except httpx.HTTPError as e:
            logger.warning(f"GitHub connection check failed: {e}")
            return False

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
        logger.debug("GitHubClient closed")
