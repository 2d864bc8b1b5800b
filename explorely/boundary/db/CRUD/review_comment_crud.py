"""
Review comment CRUD operations.

Dependencies: sqlalchemy, explorely.boundary.db.models
System role: Review comment persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from explorely.boundary.db.CRUD.base_crud import BaseCRUD
from explorely.boundary.db.models.review_model import (
    ReviewCommentLikeModel,
    ReviewCommentModel,
)


class ReviewCommentCRUD(BaseCRUD[ReviewCommentModel]):
    """CRUD operations for ReviewCommentModel and its likes."""

    def __init__(self) -> None:
        """Initialize ReviewCommentCRUD with ReviewCommentModel."""
        super().__init__(ReviewCommentModel)

    async def list_top_level(
        self,
        session: AsyncSession,
        review_id: UUID,
        limit: int,
        offset: int,
    ) -> tuple[list[ReviewCommentModel], int]:
        """Newest top-level comments of a review."""
        stmt = (
            select(ReviewCommentModel)
            .where(
                ReviewCommentModel.review_id == review_id,
                ReviewCommentModel.parent_id.is_(None),
            )
            .order_by(ReviewCommentModel.created_at.desc(), ReviewCommentModel.id)
        )
        return await self.paginate(session, stmt, limit, offset)

    async def list_replies(
        self,
        session: AsyncSession,
        parent_ids: Sequence[UUID],
    ) -> Sequence[ReviewCommentModel]:
        """Direct replies to any of parent_ids, oldest first."""
        if not parent_ids:
            return []
        stmt = (
            select(ReviewCommentModel)
            .where(ReviewCommentModel.parent_id.in_(parent_ids))
            .order_by(ReviewCommentModel.created_at, ReviewCommentModel.id)
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
        stmt = select(ReviewCommentLikeModel.review_comment_id).where(
            ReviewCommentLikeModel.review_comment_id.in_(comment_ids),
            ReviewCommentLikeModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        return set(result.scalars().all())

    async def has_liked(self, session: AsyncSession, comment_id: UUID, user_id: UUID) -> bool:
        """Whether the user likes the review comment."""
        return bool(await self.liked_ids(session, [comment_id], user_id))

    async def add_like(self, session: AsyncSession, comment_id: UUID, user_id: UUID) -> None:
        """Record a like and bump like_count atomically."""
        session.add(ReviewCommentLikeModel(review_comment_id=comment_id, user_id=user_id))
        await session.flush()
        await self.increment(session, comment_id, "like_count", 1)

    async def remove_like(self, session: AsyncSession, comment_id: UUID, user_id: UUID) -> bool:
        """Remove a like and decrement like_count. Returns False if absent."""
        stmt = delete(ReviewCommentLikeModel).where(
            ReviewCommentLikeModel.review_comment_id == comment_id,
            ReviewCommentLikeModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        if result.rowcount == 0:
            return False
        await self.increment(session, comment_id, "like_count", -1)
        return True

    async def current_like_count(self, session: AsyncSession, comment_id: UUID) -> int:
        """Read like_count straight from the table."""
        stmt = select(ReviewCommentModel.like_count).where(ReviewCommentModel.id == comment_id)
        return (await session.execute(stmt)).scalar_one()


review_comment_crud = ReviewCommentCRUD()
