"""CLI entry point for octolens.

This module provides the command-line interface for octolens. It can be
invoked as `octolens` (via the script entry point) or `python -m octolens`.
By default it starts the uvicorn server; with one or more --prompt options it
runs a single batch against the configured model and prints the JSON result.
"""

import argparse
import asyncio
import json
import logging
import sys

import uvicorn

from octolens import __version__, create_app, run
from octolens.config import OctolensSettings


def main() -> int:
    """Main entry point for the octolens CLI.

    Parses command-line arguments and either starts the uvicorn server with
    the FastAPI application or runs one batch of prompts.
    """
    parser = argparse.ArgumentParser(
        prog="octolens",
        description="Headless connector that lets LLM chats call read-only GitHub tools",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"octolens {__version__}",
    )

    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host to bind the server to (default: 127.0.0.1, can be set via OCTOLENS_HOST)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind the server to (default: 8000, can be set via OCTOLENS_PORT)",
    )

    parser.add_argument(
        "--provider",
        type=str,
        default=None,
        choices=["openai", "ollama"],
        help="Model provider (default: openai, can be set via OCTOLENS_PROVIDER)",
    )

    parser.add_argument(
        "--model",
        type=str,
        default=None,
        help="Model name for --prompt runs (default: OCTOLENS_DEFAULT_MODEL)",
    )

    parser.add_argument(
        "--prompt",
        action="append",
        default=None,
        help="Run this prompt instead of starting the server (repeatable)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO, can be set via OCTOLENS_LOG_LEVEL)",
    )

    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development (uvicorn --reload)",
    )

    args = parser.parse_args()

    # Build settings, CLI args override environment variables
    settings_kwargs = {}
    if args.host is not None:
        settings_kwargs["host"] = args.host
    if args.port is not None:
        settings_kwargs["port"] = args.port
    if args.provider is not None:
        settings_kwargs["provider"] = args.provider
    if args.log_level is not None:
        settings_kwargs["log_level"] = args.log_level

    settings = OctolensSettings(**settings_kwargs)

    if args.prompt:
        logging.basicConfig(
            level=settings.log_level.upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        result = asyncio.run(run(args.model, args.prompt, config=settings))
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return 1 if "Error" in result.to_dict() else 0

    # Create the FastAPI app
    app = create_app(settings=settings)

    # Start uvicorn
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=args.reload,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
