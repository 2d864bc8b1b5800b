"""
Review CRUD operations.

Listing, search, trending and like bookkeeping for reviews.

Dependencies: sqlalchemy, explorely.boundary.db.models
System role: Review persistence operations
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from explorely.boundary.db.CRUD.base_crud import BaseCRUD
from explorely.boundary.db.models.review_model import (
    ReviewCategory,
    ReviewLikeModel,
    ReviewModel,
)

SORT_ORDERS = {
    "recent": (ReviewModel.created_at.desc(),),
    "popular": (ReviewModel.like_count.desc(), ReviewModel.created_at.desc()),
    "rating": (ReviewModel.rating.desc(), ReviewModel.created_at.desc()),
}


class ReviewCRUD(BaseCRUD[ReviewModel]):
    """CRUD operations for ReviewModel and ReviewLikeModel."""

    def __init__(self) -> None:
        """Initialize ReviewCRUD with ReviewModel."""
        super().__init__(ReviewModel)

    async def list_reviews(
        self,
        session: AsyncSession,
        limit: int,
        offset: int,
        category: ReviewCategory | None = None,
        sort: str = "recent",
        search: str | None = None,
        reported_only: bool = False,
    ) -> tuple[list[ReviewModel], int]:
        """
        Page of reviews.

        Args:
            session: Async database session
            limit: Page size
            offset: Rows to skip
            category: Restrict to one category
            sort: recent, popular or rating
            search: Substring matched against title, content and location
            reported_only: Restrict to reviews with report_count > 0

        Returns:
            (reviews, total matches)
        """
        stmt = select(ReviewModel)
        if category is not None:
            stmt = stmt.where(ReviewModel.category == category)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    ReviewModel.title.ilike(pattern),
                    ReviewModel.content.ilike(pattern),
                    ReviewModel.location.ilike(pattern),
                )
            )
        if reported_only:
            stmt = stmt.where(ReviewModel.report_count > 0).order_by(
                ReviewModel.report_count.desc()
            )
        stmt = stmt.order_by(*SORT_ORDERS.get(sort, SORT_ORDERS["recent"]), ReviewModel.id)
        return await self.paginate(session, stmt, limit, offset)

    async def trending_since(
        self,
        session: AsyncSession,
        since: datetime,
        limit: int,
    ) -> Sequence[ReviewModel]:
        """Most liked reviews created at or after since."""
        stmt = (
            select(ReviewModel)
            .where(ReviewModel.created_at >= since)
            .order_by(ReviewModel.like_count.desc(), ReviewModel.created_at.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def has_liked(self, session: AsyncSession, review_id: UUID, user_id: UUID) -> bool:
        """Whether the user likes the review."""
        stmt = select(ReviewLikeModel.review_id).where(
            ReviewLikeModel.review_id == review_id,
            ReviewLikeModel.user_id == user_id,
        )
        return (await session.execute(stmt)).first() is not None

    async def liked_ids(
        self,
        session: AsyncSession,
        review_ids: Sequence[UUID],
        user_id: UUID,
    ) -> set[UUID]:
        """Subset of review_ids the user has liked."""
        if not review_ids:
            return set()
        stmt = select(ReviewLikeModel.review_id).where(
            ReviewLikeModel.review_id.in_(review_ids),
            ReviewLikeModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        return set(result.scalars().all())

    async def add_like(self, session: AsyncSession, review_id: UUID, user_id: UUID) -> None:
        """Record a like and bump like_count atomically."""
        session.add(ReviewLikeModel(review_id=review_id, user_id=user_id))
        await session.flush()
        await self.increment(session, review_id, "like_count", 1)

    async def remove_like(self, session: AsyncSession, review_id: UUID, user_id: UUID) -> bool:
        """Remove a like and decrement like_count. Returns False if absent."""
        stmt = delete(ReviewLikeModel).where(
            ReviewLikeModel.review_id == review_id,
            ReviewLikeModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        if result.rowcount == 0:
            return False
        await self.increment(session, review_id, "like_count", -1)
        return True

    async def current_counts(self, session: AsyncSession, review_id: UUID) -> tuple[int, int]:
        """(like_count, comment_count) read straight from the table."""
        stmt = select(ReviewModel.like_count, ReviewModel.comment_count).where(
            ReviewModel.id == review_id
        )
        row = (await session.execute(stmt)).one()
        return row[0], row[1]


review_crud = ReviewCRUD()
