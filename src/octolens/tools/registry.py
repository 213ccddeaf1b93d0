"""Catalog of the GitHub tools offered to the model.

The registry is pure data: four immutable descriptors, defined once at import
time and rendered into the provider's ``tools`` payload on every first-round
completion request.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

_TOKEN_PARAMETER = {
    "type": "string",
    "description": "The access token for GitHub API authentication",
}


@dataclass(frozen=True)
class ToolDescriptor:
    """A named, schema-described operation the model may call.

    Attributes:
        name: Unique function name as seen by the model
        description: Human readable description of the operation
        parameters: Parameter name -> {"type": ..., "description": ...}
        required: Names of the parameters the model must supply
    """

    name: str
    description: str
    parameters: Mapping[str, Mapping[str, str]] = field(default_factory=dict)
    required: frozenset[str] = frozenset()

    def json_schema(self) -> dict[str, Any]:
        """Render the parameters as a JSON schema object."""
        properties = {name: dict(spec) for name, spec in self.parameters.items()}
        # Keep the declaration order for the required list
        required = [name for name in self.parameters if name in self.required]
        return {"type": "object", "properties": properties, "required": required}

    def to_tool_spec(self) -> dict[str, Any]:
        """Render the descriptor in the chat-completions ``tools`` format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.json_schema(),
            },
        }


def _descriptor(
    name: str, description: str, parameters: dict[str, dict[str, str]]
) -> ToolDescriptor:
    return ToolDescriptor(
        name=name,
        description=description,
        parameters=MappingProxyType(
            {key: MappingProxyType(value) for key, value in parameters.items()}
        ),
        required=frozenset(parameters),
    )


GITHUB_TOOLS: tuple[ToolDescriptor, ...] = (
    _descriptor(
        "getUserData",
        "Fetch user data from GitHub",
        {
            "username": {
                "type": "string",
                "description": "The GitHub username of the user",
            },
            "token": _TOKEN_PARAMETER,
        },
    ),
    _descriptor(
        "getRepositoryData",
        "Fetch repository data for a user from GitHub",
        {
            "username": {
                "type": "string",
                "description": "The GitHub username of the user whose repositories are to be fetched",
            },
            "token": _TOKEN_PARAMETER,
        },
    ),
    _descriptor(
        "getCommitHistory",
        "Fetch the commit history for a specific repository from GitHub",
        {
            "username": {
                "type": "string",
                "description": "The GitHub username of the repository owner",
            },
            "repoName": {
                "type": "string",
                "description": "The name of the repository",
            },
            "token": _TOKEN_PARAMETER,
        },
    ),
    _descriptor(
        "getPullRequestDiff",
        "Fetches the differential changes of a specific pull request from a GitHub repository.",
        {
            "username": {
                "type": "string",
                "description": "The GitHub username of the repository owner",
            },
            "repoName": {
                "type": "string",
                "description": "The name of the repository from which the pull request diff will be fetched",
            },
            "pullRequestNumber": {
                "type": "number",
                "description": "The number identifying the specific pull request",
            },
            "token": {
                "type": "string",
                "description": "Authentication token used to access the GitHub API",
            },
        },
    ),
)

_BY_NAME: Mapping[str, ToolDescriptor] = MappingProxyType(
    {tool.name: tool for tool in GITHUB_TOOLS}
)


def get_descriptor(name: str) -> ToolDescriptor | None:
    """Look up a descriptor by function name.

    Args:
        name: The function name requested by the model

    Returns:
        ToolDescriptor | None: The descriptor, or None if the name is unknown
    """
    return _BY_NAME.get(name)


def tool_specs() -> list[dict[str, Any]]:
    """Build the ``tools`` payload for a completion request."""
    return [tool.to_tool_spec() for tool in GITHUB_TOOLS]
