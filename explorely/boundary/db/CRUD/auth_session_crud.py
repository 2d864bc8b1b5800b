"""
Authentication session CRUD operations.

Dependencies: sqlalchemy, explorely.boundary.db.models
System role: Server-side session store
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from explorely.boundary.db.CRUD.base_crud import BaseCRUD
from explorely.boundary.db.models.auth_session_model import AuthSessionModel


class AuthSessionCRUD(BaseCRUD[AuthSessionModel]):
    """CRUD operations for AuthSessionModel."""

    def __init__(self) -> None:
        """Initialize AuthSessionCRUD with AuthSessionModel."""
        super().__init__(AuthSessionModel)

    async def get_active(
        self,
        session: AsyncSession,
        session_id: UUID,
        now: datetime,
    ) -> AuthSessionModel | None:
        """
        Retrieve a session that has not yet expired.

        Args:
            session: Async database session
            session_id: `sid` claim of the bearer token
            now: Current time

        Returns:
            AuthSessionModel if present and live, None otherwise
        """
        stmt = select(AuthSessionModel).where(
            AuthSessionModel.id == session_id,
            AuthSessionModel.expires_at > now,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_for_user(self, session: AsyncSession, user_id: UUID) -> int:
        """Revoke every session of a user. Returns the number removed."""
        stmt = delete(AuthSessionModel).where(AuthSessionModel.user_id == user_id)
        result = await session.execute(stmt)
        return result.rowcount

    async def purge_expired(self, session: AsyncSession, now: datetime) -> int:
        """Delete sessions whose expiry has passed. Returns the number removed."""
        stmt = delete(AuthSessionModel).where(AuthSessionModel.expires_at <= now)
        result = await session.execute(stmt)
        return result.rowcount


auth_session_crud = AuthSessionCRUD()
