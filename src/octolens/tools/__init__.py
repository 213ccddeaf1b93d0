"""GitHub tool catalog, HTTP client, and execution layer.

This package provides the fixed catalog of GitHub lookup tools offered to the
model, the httpx client that performs the lookups, and the executor that
validates and runs model-requested tool calls.
"""

from octolens.tools.executor import ToolExecutor, ToolName
from octolens.tools.github import GitHubClient
from octolens.tools.registry import GITHUB_TOOLS, ToolDescriptor, tool_specs

__all__ = [
    "GITHUB_TOOLS",
    "GitHubClient",
    "ToolDescriptor",
    "ToolExecutor",
    "ToolName",
    "tool_specs",
]
