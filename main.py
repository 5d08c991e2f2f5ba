#!/usr/bin/env python3
"""Command line entry point for the PR reviewer service."""

import argparse
import logging
import sys

from reviewer_service.config.settings import settings
from reviewer_service.utils.database import Database
from reviewer_service.utils.retry_logic import wait_for_database
from reviewer_service.web_interface import configure_logging, create_app

logger = logging.getLogger(__name__)


def serve(args, database: Database):
    """Wait for the database, make sure tables exist and run the dev server."""
    wait_for_database(
        database,
        max_retries=settings.database.connect_retries,
        base_delay=settings.database.connect_retry_delay,
    )
    app = create_app(database=database, create_tables=True)
    logger.info(f"Serving on {args.host}:{args.port}")
    app.run(host=args.host, port=args.port, debug=settings.web.debug)


def init_db(args, database: Database):
    wait_for_database(
        database,
        max_retries=settings.database.connect_retries,
        base_delay=settings.database.connect_retry_delay,
    )
    database.init_database()


def wait_for_db(args, database: Database):
    wait_for_database(
        database,
        max_retries=args.retries,
        base_delay=settings.database.connect_retry_delay,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="PR reviewer assignment service")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=settings.web.host, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=settings.web.port, help="Bind port")
    serve_parser.set_defaults(func=serve)

    init_parser = subparsers.add_parser("init-db", help="Create database tables")
    init_parser.set_defaults(func=init_db)

    wait_parser = subparsers.add_parser("wait-for-db", help="Block until the database is reachable")
    wait_parser.add_argument("--retries", type=int, default=settings.database.connect_retries,
                             help="Connection attempts before giving up")
    wait_parser.set_defaults(func=wait_for_db)

    return parser


def main(argv=None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)

    database = Database.from_config(settings.database)
    try:
        args.func(args, database)
    except Exception as e:
        logger.error(f"{args.command} failed: {e}")
        return 1
    finally:
        database.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())
