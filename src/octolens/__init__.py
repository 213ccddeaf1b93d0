"""octolens: LLM tool-calling connector for read-only GitHub lookups.

This package lets a chat model call four GitHub lookup tools (user profile,
repositories, commit history, pull request files) and answer a batch of
prompts with their results, either through the ``run`` connector function
or through a FastAPI server.
"""

__version__ = "0.1.0"

from octolens.app import create_app  # noqa: E402
from octolens.connector import run  # noqa: E402

__all__ = ["create_app", "run", "__version__"]
