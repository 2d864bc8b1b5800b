"""
Comment CRUD operations.

Dependencies: sqlalchemy, explorely.boundary.db.models
System role: Post comment persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from explorely.boundary.db.CRUD.base_crud import BaseCRUD
from explorely.boundary.db.models.comment_model import CommentLikeModel, CommentModel


class CommentCRUD(BaseCRUD[CommentModel]):
    """CRUD operations for CommentModel and CommentLikeModel."""

    def __init__(self) -> None:
        """Initialize CommentCRUD with CommentModel."""
        super().__init__(CommentModel)

    async def list_by_post(self, session: AsyncSession, post_id: UUID) -> Sequence[CommentModel]:
        """Every comment of a post, oldest first."""
        stmt = (
            select(CommentModel)
            .where(CommentModel.post_id == post_id)
            .order_by(CommentModel.created_at, CommentModel.id)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def liked_ids(
        self,
        session: AsyncSession,
        comment_ids: Sequence[UUID],
        user_id: UUID,
    ) -> set[UUID]:
        """Subset of comment_ids the user has liked."""
        if not comment_ids:
            return set()
        stmt = select(CommentLikeModel.comment_id).where(
            CommentLikeModel.comment_id.in_(comment_ids),
            CommentLikeModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        return set(result.scalars().all())

    async def has_liked(self, session: AsyncSession, comment_id: UUID, user_id: UUID) -> bool:
        """Whether the user likes the comment."""
        return bool(await self.liked_ids(session, [comment_id], user_id))

    async def add_like(self, session: AsyncSession, comment_id: UUID, user_id: UUID) -> None:
        """Record a like and bump like_count atomically."""
        session.add(CommentLikeModel(comment_id=comment_id, user_id=user_id))
        await session.flush()
        await self.increment(session, comment_id, "like_count", 1)

    async def remove_like(self, session: AsyncSession, comment_id: UUID, user_id: UUID) -> bool:
        """Remove a like and decrement like_count. Returns False if absent."""
        stmt = delete(CommentLikeModel).where(
            CommentLikeModel.comment_id == comment_id,
            CommentLikeModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        if result.rowcount == 0:
            return False
        await self.increment(session, comment_id, "like_count", -1)
        return True

    async def current_like_count(self, session: AsyncSession, comment_id: UUID) -> int:
        """Read like_count straight from the table."""
        stmt = select(CommentModel.like_count).where(CommentModel.id == comment_id)
        return (await session.execute(stmt)).scalar_one()


comment_crud = CommentCRUD()
