"""
Subscriptions API - Command Line Interface

Commands:
    serve         Run the HTTP server (uvicorn)
    migrate       Create missing tables
    migrate-down  Drop all tables

Usage:
    subs-api serve --port 8080
    subs-api migrate --database-url postgresql://user:pw@localhost:5432/postgres
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from subs_api.core.config import Settings, settings
from subs_api.db.session import Database
from subs_api.services.error_logging import configure_logging


logger = logging.getLogger(__name__)


def _resolve_settings(args: argparse.Namespace) -> Settings:
    if args.database_url:
        return settings.model_copy(update={"DATABASE_URL": args.database_url})
    return settings


def run_server(args: argparse.Namespace) -> int:
    """Start uvicorn on the configured host and port."""
    import uvicorn

    uvicorn.run(
        "subs_api.main:app",
        host=args.host or settings.APP_HOST,
        port=args.port or settings.APP_PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=args.reload,
    )
    return 0


def run_migrate(args: argparse.Namespace) -> int:
    """Create every table that does not exist yet."""
    database = Database.from_settings(_resolve_settings(args))
    database.init()
    try:
        database.create_schema()
        logger.info("Database tables created/verified")
    finally:
        database.close()
    return 0


def run_migrate_down(args: argparse.Namespace) -> int:
    """Drop every table known to the models."""
    if not args.yes:
        logger.error("migrate-down drops all data, pass --yes to confirm")
        return 1

    database = Database.from_settings(_resolve_settings(args))
    database.init()
    try:
        database.drop_schema()
        logger.info("Database tables dropped")
    finally:
        database.close()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="subs-api",
        description="Subscriptions API server and schema management",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="run the HTTP server")
    serve.add_argument("--host", help=f"bind address (default: {settings.APP_HOST})")
    serve.add_argument("--port", type=int, help=f"bind port (default: {settings.APP_PORT})")
    serve.add_argument("--reload", action="store_true", help="reload on code changes (development)")
    serve.set_defaults(handler=run_server)

    migrate = subparsers.add_parser("migrate", help="create missing tables")
    migrate.add_argument("--database-url", help="override DATABASE_URL")
    migrate.set_defaults(handler=run_migrate)

    migrate_down = subparsers.add_parser("migrate-down", help="drop all tables")
    migrate_down.add_argument("--database-url", help="override DATABASE_URL")
    migrate_down.add_argument("--yes", action="store_true", help="confirm dropping all data")
    migrate_down.set_defaults(handler=run_migrate_down)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(settings.LOG_LEVEL)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
