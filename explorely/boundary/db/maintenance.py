"""
Database maintenance commands.

Usage:
    python -m explorely.boundary.db.maintenance create-tables
    python -m explorely.boundary.db.maintenance drop-tables
    python -m explorely.boundary.db.maintenance purge

purge removes notifications past the retention period and expired
auth sessions.

Dependencies: sqlalchemy, python-dotenv, explorely.configs, explorely.core
System role: Operational entry point for schema and retention jobs
"""

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

from explorely.application.services.notification_service import NotificationService
from explorely.boundary.db.base import Base, utc_now
from explorely.boundary.db.CRUD.auth_session_crud import auth_session_crud
from explorely.configs import Settings, get_settings
from explorely.core.context import AppContext
from explorely.observability.logger import configure_logging

logger = logging.getLogger(__name__)

COMMANDS = ("create-tables", "drop-tables", "purge")


async def drop_tables(context: AppContext) -> None:
    """Drop every table registered on Base.metadata."""
    import explorely.boundary.db.models  # noqa: F401

    async with context.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info("Database tables dropped")


async def purge(context: AppContext) -> dict:
    """
    Run the retention purge in one transaction.

    Args:
        context: Application context

    Returns:
        dict: Rows removed per table
    """
    async with context.session_factory() as session:
        async with session.begin():
            notifications = await NotificationService(
                session, context.settings.notifications
            ).purge_expired()
            sessions = await auth_session_crud.purge_expired(session, utc_now())
    removed = {"notifications": notifications, "auth_sessions": sessions}
    logger.info("Retention purge complete", extra=removed)
    return removed


async def run(command: str, settings: Settings) -> None:
    """
    Execute one maintenance command against the configured database.

    Args:
        command: One of COMMANDS
        settings: Application settings

    Raises:
        ValueError: If the command is unknown
    """
    if command not in COMMANDS:
        raise ValueError(f"Unknown command: {command}")

    context = AppContext.build(settings)
    try:
        if command == "create-tables":
            await context.create_tables()
        elif command == "drop-tables":
            await drop_tables(context)
        else:
            await purge(context)
    finally:
        await context.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Explorely database maintenance")
    parser.add_argument("command", choices=COMMANDS)
    args = parser.parse_args(argv)

    load_dotenv()
    settings = get_settings()
    configure_logging(settings.log_level)
    try:
        asyncio.run(run(args.command, settings))
    except Exception as e:
        logger.exception("Maintenance command failed", extra={"command": args.command, "error": str(e)})
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
