"""FastAPI routers for API endpoints.

This package contains all route handlers organized by resource type:
health, the tool catalog, and batch runs.
"""

from octolens.routers import health, run, tools

__all__ = [
    "health",
    "run",
    "tools",
]
