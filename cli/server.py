#!/usr/bin/env python3
"""CLI for running the knowledge document API server."""

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from knowledgedoc.config import DEFAULT_CONFIG_PATH, ENV_DOCUMENT, ENV_SECTION_LEVEL, load_settings

load_dotenv()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Run the knowledge document API server"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to config file (default: {DEFAULT_CONFIG_PATH})"
    )
    parser.add_argument(
        "--host",
        help="Host to bind to (default: from config, 127.0.0.1)"
    )
    parser.add_argument(
        "-p", "--port",
        type=int,
        help="Port to bind to (default: from config, 8000)"
    )
    parser.add_argument(
        "-f", "--file",
        help="Knowledge file to serve (default: from config or KNOWLEDGEDOC_FILE)"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development"
    )

    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    # The app factory reads the document and level from the environment
    os.environ[ENV_DOCUMENT] = args.file or str(settings.document)
    os.environ[ENV_SECTION_LEVEL] = str(settings.section_level)

    try:
        import uvicorn
        uvicorn.run(
            "knowledgedoc.web.app:create_app_from_settings",
            factory=True,
            host=args.host or settings.host,
            port=args.port or settings.port,
            reload=args.reload,
        )
    except KeyboardInterrupt:
        print("\nServer stopped", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
