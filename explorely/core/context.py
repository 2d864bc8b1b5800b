"""
Application context.

Everything the request handlers share (settings, engine, session factory,
authentication provider) is built once at startup and hung on
app.state.context instead of living in module globals.

Dependencies: sqlalchemy, explorely.configs, explorely.boundary.db, explorely.core
System role: Process-wide dependency container
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from explorely.boundary.db.base import Base
from explorely.boundary.db.connection import get_async_engine, get_async_session_factory
from explorely.configs.settings import Settings
from explorely.core.auth_provider import AuthenticationProvider, TokenAuthenticationProvider

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Shared resources for one running application."""

    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    auth_provider: AuthenticationProvider

    @classmethod
    def build(cls, settings: Settings) -> "AppContext":
        """
        Construct engine, session factory and auth provider from settings.

        Args:
            settings: Application settings

        Returns:
            AppContext: Ready-to-use context
        """
        engine = get_async_engine(settings.database)
        return cls(
            settings=settings,
            engine=engine,
            session_factory=get_async_session_factory(engine),
            auth_provider=TokenAuthenticationProvider(settings.auth),
        )

    async def create_tables(self) -> None:
        """Create every table registered on Base.metadata."""
        # Register all models on the metadata
        import explorely.boundary.db.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    async def close(self) -> None:
        """Dispose the engine's connection pool."""
        await self.engine.dispose()
