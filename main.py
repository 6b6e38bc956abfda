"""Command-line entry point for the ProfRAG server and review loader."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import uvicorn

from profrag import ProfessorAdvisor, ingest_reviews
from profrag.config import config

if TYPE_CHECKING:
    from collections.abc import Sequence
    from logging import Logger

APP_FACTORY = "profrag.api:create_app"


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Build the CLI parser and read command-line arguments."""  # noqa: DOC201
    parser = argparse.ArgumentParser(
        description="Serve professor recommendations or load reviews.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the streaming chat API.")
    serve.add_argument(
        "--host",
        default=config.HOST,
        help=f"Bind address for the API server (default: {config.HOST}).",
    )
    serve.add_argument(
        "--port",
        type=int,
        default=config.PORT,
        help=f"Port for the API server (default: {config.PORT}).",
    )
    serve.add_argument(
        "--reload",
        action="store_true",
        help="Restart the server when source files change.",
    )

    load = subparsers.add_parser("load", help="Load reviews into the index.")
    load.add_argument(
        "reviews",
        type=Path,
        help='JSON file of the form {"reviews": [...]}.',
    )
    return parser.parse_args(argv)


def run_server(args: argparse.Namespace, logger: Logger) -> int:
    """Run uvicorn with the application factory."""  # noqa: DOC201
    logger.info("Starting ProfRAG API at http://%s:%s", args.host, args.port)
    uvicorn.run(
        APP_FACTORY,
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=config.LOG_LEVEL.lower(),
    )
    return 0


def run_load(args: argparse.Namespace, logger: Logger) -> int:
    """Ingest a reviews file and report index statistics."""  # noqa: DOC201
    if not args.reviews.exists():
        logger.error("Reviews file not found: %s", args.reviews)
        return 1

    advisor = ProfessorAdvisor.from_config(config)
    try:
        written = ingest_reviews(
            args.reviews, advisor.embedding_service, advisor.review_index
        )
    except ValueError:
        logger.exception("Invalid reviews file")
        return 1

    logger.info("Loaded %d reviews into %s", written, advisor.review_index.index_name)
    logger.info("Index stats: %s", advisor.review_index.describe())
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Validate configuration and dispatch the selected command."""  # noqa: DOC201
    args = parse_args(argv)

    config.setup_logging()
    logger = config.get_logger(__name__)

    try:
        config.validate()
    except ValueError:
        logger.exception("Configuration invalid")
        return 1

    if args.command == "serve":
        return run_server(args, logger)
    return run_load(args, logger)


if __name__ == "__main__":
    sys.exit(main())
