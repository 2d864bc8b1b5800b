"""
Database connection management.

Provides async SQLAlchemy engine, session factory, and the FastAPI
dependency for per-request session injection.

Dependencies: sqlalchemy, fastapi, explorely.configs
System role: Database connection lifecycle management
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from explorely.configs.database import DatabaseSettings

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_async_engine(db_config: DatabaseSettings) -> AsyncEngine:
    """
    Create async SQLAlchemy engine for the configured URL.

    PostgreSQL gets a sized connection pool with pre-ping. In-memory
    SQLite shares a single connection so every session sees the same data.

    Args:
        db_config: Database settings

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Raises:
        ArgumentError: If database URL is invalid or engine creation fails
    """
    if db_config.is_sqlite:
        kwargs = {"connect_args": {"check_same_thread": False}}
        if db_config.is_memory:
            kwargs["poolclass"] = StaticPool
        engine = create_async_engine(db_config.url, echo=db_config.echo_sql, **kwargs)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        db_config.url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


def get_async_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory for database operations.

    Args:
        engine: Engine the sessions bind to

    Returns:
        async_sessionmaker: Factory with autoflush off and no expiry on commit

    Usage:
        SessionFactory = get_async_session_factory(engine)
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding one transactional session per request.

    Commits when the route function returns and rolls back when anything
    raises, so multi-row operations (cascading deletes, counter updates)
    land together or not at all. Routes declare it function-scoped so a
    failed commit still turns into an error response.

    Yields:
        AsyncSession: Session bound to the application's engine

    Raises:
        SQLAlchemyError: Propagated from database operations
    """
    session_factory = request.app.state.context.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
