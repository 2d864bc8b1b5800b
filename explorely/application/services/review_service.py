"""
Review service.

Writing, browsing, trending and liking place reviews.

Dependencies: sqlalchemy, explorely.boundary.db.CRUD, explorely.core
System role: Review use case orchestration
"""

import logging
from datetime import datetime, time, timezone
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from explorely.application.services.notification_service import NotificationService
from explorely.application.services.pagination import page_meta, page_offset
from explorely.application.services.serializers import review_dict
from explorely.boundary.db.base import utc_now
from explorely.boundary.db.CRUD.review_crud import SORT_ORDERS, review_crud
from explorely.boundary.db.models.notification_model import NotificationType
from explorely.boundary.db.models.review_model import ReviewCategory, ReviewModel
from explorely.boundary.db.models.user_model import UserModel
from explorely.core.deletion_policy import delete_entities
from explorely.core.exceptions import AuthorizationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

TRENDING_LIMIT = 10


class ReviewService:
    """Review orchestrator."""

    def __init__(self, db: AsyncSession, notifications: NotificationService) -> None:
        """
        Initialize review service.

        Args:
            db: Async SQLAlchemy session
            notifications: Fan-out for REVIEW_LIKE
        """
        self.db = db
        self.notifications = notifications

    async def _get(self, review_id: UUID) -> ReviewModel:
        review = await review_crud.get_by_id(self.db, review_id)
        if review is None:
            raise NotFoundError("Review", review_id)
        return review

    async def _dicts(self, reviews, viewer: UserModel | None) -> list[dict]:
        ids = [r.id for r in reviews]
        liked = await review_crud.liked_ids(self.db, ids, viewer.id) if viewer else set()
        return [review_dict(r, r.id in liked) for r in reviews]

    async def create_review(self, author: UserModel, **fields) -> dict:
        """
        Publish a review.

        Args:
            author: Authenticated caller
            **fields: title, content, location, user_city, user_country,
                category, rating, images

        Returns:
            dict: Created review
        """
        review = await review_crud.create(self.db, author_id=author.id, **fields)
        await self.db.refresh(review, attribute_names=["author"])
        logger.info(
            "Review created",
            extra={"review_id": str(review.id), "category": review.category.value},
        )
        return review_dict(review)

    async def list_reviews(
        self,
        viewer: UserModel | None,
        page: int,
        limit: int,
        category: ReviewCategory | None = None,
        sort: str = "recent",
        search: str | None = None,
    ) -> dict:
        """
        Page of reviews.

        Raises:
            ValidationError: If sort is not recent, popular or rating
        """
        if sort not in SORT_ORDERS:
            raise ValidationError(f"Invalid sort option: {sort}", field="sort")
        reviews, total = await review_crud.list_reviews(
            self.db,
            limit,
            page_offset(page, limit),
            category=category,
            sort=sort,
            search=search.strip() if search else None,
        )
        return {
            "items": await self._dicts(reviews, viewer),
            **page_meta(total, page, limit, len(reviews)),
        }

    async def search_reviews(
        self,
        query: str,
        viewer: UserModel | None,
        page: int,
        limit: int,
    ) -> dict:
        """Reviews whose title, content or location contains query."""
        if not query or not query.strip():
            raise ValidationError("Search query is required", field="q")
        return await self.list_reviews(viewer, page, limit, search=query)

    async def trending(self, viewer: UserModel | None) -> list[dict]:
        """Most liked reviews created today (UTC)."""
        midnight = datetime.combine(utc_now().date(), time.min, tzinfo=timezone.utc)
        reviews = await review_crud.trending_since(self.db, midnight, TRENDING_LIMIT)
        return await self._dicts(reviews, viewer)

    async def get_review(self, review_id: UUID, viewer: UserModel | None) -> dict:
        """Review detail."""
        review = await self._get(review_id)
        liked = await review_crud.has_liked(self.db, review_id, viewer.id) if viewer else False
        return review_dict(review, liked)

    async def like_status(self, review_id: UUID, user: UserModel) -> dict:
        """Whether the caller likes the review, and its like count."""
        await self._get(review_id)
        like_count, _ = await review_crud.current_counts(self.db, review_id)
        return {
            "liked": await review_crud.has_liked(self.db, review_id, user.id),
            "like_count": like_count,
        }

    async def toggle_like(self, review_id: UUID, user: UserModel) -> dict:
        """
        Like or unlike a review, notifying its author on like.

        Returns:
            dict: liked, like_count
        """
        review = await self._get(review_id)
        if await review_crud.remove_like(self.db, review_id, user.id):
            liked = False
            await self.notifications.retract(
                review.author_id, user.id, NotificationType.REVIEW_LIKE, review_id=review_id
            )
        else:
            await review_crud.add_like(self.db, review_id, user.id)
            liked = True
            await self.notifications.notify(
                review.author_id, user.id, NotificationType.REVIEW_LIKE, review_id=review_id
            )
        like_count, _ = await review_crud.current_counts(self.db, review_id)
        return {"liked": liked, "like_count": like_count}

    async def delete_review(self, review_id: UUID, user: UserModel) -> dict:
        """
        Delete a review with its comments, likes and notifications.

        Raises:
            AuthorizationError: If the caller is neither author nor admin
        """
        review = await self._get(review_id)
        if review.author_id != user.id and not user.is_admin:
            raise AuthorizationError("You can only delete your own reviews")
        removed = await delete_entities(self.db, "review", [review_id])
        return {"message": "Review deleted successfully", "removed": removed}
