"""Tool execution for model-requested GitHub lookups.

The executor is the trust boundary for tool calls: it resolves the requested
name against a closed set of operations, validates the model-supplied
arguments, and replaces any ``token`` argument with the configured GitHub
credential before anything touches the network.
"""

import json
import logging
from enum import Enum
from typing import Any

from octolens.errors import InvalidToolArgumentsError, UnknownToolError
from octolens.tools.github import GitHubClient
from octolens.tools.registry import ToolDescriptor, get_descriptor

logger = logging.getLogger(__name__)


class ToolName(str, Enum):
    """The operations a tool call can resolve to."""

    GET_USER_DATA = "getUserData"
    GET_REPOSITORY_DATA = "getRepositoryData"
    GET_COMMIT_HISTORY = "getCommitHistory"
    GET_PULL_REQUEST_DIFF = "getPullRequestDiff"
    UNKNOWN = "unknown"

    @classmethod
    def resolve(cls, name: str) -> "ToolName":
        """Map a requested function name to a ToolName, falling back to UNKNOWN."""
        try:
            return cls(name)
        except ValueError:
            return cls.UNKNOWN


def _matches_json_type(value: Any, expected: str) -> bool:
    """Check whether a Python value matches a basic JSON Schema type."""
    if expected == "string":
        return isinstance(value, str)
    if expected == "integer":
        return isinstance(value, int) and not isinstance(value, bool)
    if expected == "number":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if expected == "boolean":
        return isinstance(value, bool)
    if expected == "object":
        return isinstance(value, dict)
    if expected == "array":
        return isinstance(value, list)
    return False


def parse_arguments(raw: str | dict[str, Any] | None) -> dict[str, Any]:
    """Parse serialized tool arguments into a dict.

    Args:
        raw: The JSON text produced by the model (or an already decoded mapping)

    Returns:
        dict: The decoded arguments

    Raises:
        InvalidToolArgumentsError: If the arguments are not a JSON object
    """
    if raw is None or raw == "":
        return {}
    if isinstance(raw, dict):
        return dict(raw)
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidToolArgumentsError(f"Invalid JSON in tool arguments: {e}") from e
    if not isinstance(parsed, dict):
        raise InvalidToolArgumentsError("Tool arguments must be a JSON object")
    return parsed


def validate_arguments(args: dict[str, Any], descriptor: ToolDescriptor) -> None:
    """Validate arguments against the descriptor's required fields and types.

    Raises:
        InvalidToolArgumentsError: If a required field is missing or has the wrong type
    """
    for name in descriptor.parameters:
        if name in descriptor.required and name not in args:
            raise InvalidToolArgumentsError(
                f"Missing required argument for {descriptor.name}: {name}"
            )

    for key, value in args.items():
        spec = descriptor.parameters.get(key)
        if spec is None:
            continue
        expected = spec.get("type")
        if expected and not _matches_json_type(value, expected):
            raise InvalidToolArgumentsError(
                f"Argument '{key}' for {descriptor.name} has wrong type; expected {expected}"
            )


def _pull_request_number(value: int | float) -> int:
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidToolArgumentsError(
                f"Argument 'pullRequestNumber' must be a whole number, got {value}"
            )
        value = int(value)
    if value < 1:
        raise InvalidToolArgumentsError(
            f"Argument 'pullRequestNumber' must be positive, got {value}"
        )
    return value


class ToolExecutor:
    """Executes tool calls against GitHub with a trusted credential.

    Attributes:
        github: The GitHub client used for all lookups
        _github_token: The run's configured GitHub token
    """

    def __init__(self, github: GitHubClient, github_token: str) -> None:
        self.github = github
        self._github_token = github_token

    async def execute(self, name: str, arguments: str | dict[str, Any] | None) -> str:
        """Execute a single tool call.

        Args:
            name: The function name requested by the model
            arguments: The serialized arguments requested by the model

        Returns:
            str: The serialized tool result

        Raises:
            UnknownToolError: If the name is not one of the registered tools
            InvalidToolArgumentsError: If the arguments are malformed
            GitHubAPIError: If GitHub answers with a non-success status
        """
        tool = ToolName.resolve(name)
        if tool is ToolName.UNKNOWN:
            raise UnknownToolError(name)

        descriptor = get_descriptor(tool.value)
        if descriptor is None:
            raise UnknownToolError(name)

        args = parse_arguments(arguments)
        # Never trust a model-supplied credential
        args["token"] = self._github_token
        validate_arguments(args, descriptor)

        logged_args = {key: value for key, value in args.items() if key != "token"}
        logger.debug(f"Executing tool {tool.value} with arguments: {logged_args}")

        token = args["token"]
        if tool is ToolName.GET_USER_DATA:
            return await self.github.get_user_data(token, args["username"])
        if tool is ToolName.GET_REPOSITORY_DATA:
            return await self.github.get_repository_data(token, args["username"])
        if tool is ToolName.GET_COMMIT_HISTORY:
            return await self.github.get_commit_history(
                token, args["username"], args["repoName"]
            )
        return await self.github.get_pull_request_diff(
            token,
            args["username"],
            args["repoName"],
            _pull_request_number(args["pullRequestNumber"]),
        )
