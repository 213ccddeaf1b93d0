"""Exception hierarchy for octolens.

Tool failures are raised as ``ToolExecutionError`` subclasses so the
orchestrator can record them per prompt; ``ConfigurationError`` aborts a
whole run before any prompt is processed.
"""


class OctolensError(Exception):
    """Base class for all octolens errors."""


class ConfigurationError(OctolensError):
    """A required setting or credential is missing."""


class ToolExecutionError(OctolensError):
    """A tool call could not be executed."""


class UnknownToolError(ToolExecutionError):
    """The model requested a tool that is not in the registry."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class InvalidToolArgumentsError(ToolExecutionError):
    """Tool arguments are not a JSON object or do not match the tool schema."""


class GitHubAPIError(ToolExecutionError):
    """GitHub answered with a non-success status."""

    def __init__(self, status_code: int, status_text: str) -> None:
        super().__init__(f"GitHub API request failed: {status_text}")
        self.status_code = status_code
        self.status_text = status_text
