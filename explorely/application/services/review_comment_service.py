"""
Review comment service.

Comments on reviews (one level of replies), REVIEW_COMMENT and
REVIEW_COMMENT_LIKE fan-out, and the review's comment_count.

Dependencies: sqlalchemy, explorely.boundary.db.CRUD, explorely.core
System role: Review comment use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from explorely.application.services.notification_service import NotificationService
from explorely.application.services.pagination import page_meta, page_offset
from explorely.application.services.serializers import review_comment_dict
from explorely.boundary.db.CRUD.review_comment_crud import review_comment_crud
from explorely.boundary.db.CRUD.review_crud import review_crud
from explorely.boundary.db.models.notification_model import NotificationType
from explorely.boundary.db.models.review_model import ReviewCommentModel
from explorely.boundary.db.models.user_model import UserModel
from explorely.core.deletion_policy import delete_entities
from explorely.core.exceptions import AuthorizationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class ReviewCommentService:
    """Review comment orchestrator."""

    def __init__(self, db: AsyncSession, notifications: NotificationService) -> None:
        self.db = db
        self.notifications = notifications

    async def _get(self, comment_id: UUID) -> ReviewCommentModel:
        comment = await review_comment_crud.get_by_id(self.db, comment_id)
        if comment is None:
            raise NotFoundError("Review comment", comment_id)
        return comment

    async def list_comments(
        self,
        review_id: UUID,
        viewer: UserModel | None,
        page: int,
        limit: int,
    ) -> dict:
        """
        Page of top-level comments, each with its replies.

        Raises:
            NotFoundError: If the review does not exist
        """
        if not await review_crud.exists(self.db, review_id):
            raise NotFoundError("Review", review_id)
        top_level, total = await review_comment_crud.list_top_level(
            self.db, review_id, limit, page_offset(page, limit)
        )
        replies = await review_comment_crud.list_replies(self.db, [c.id for c in top_level])
        all_ids = [c.id for c in top_level] + [r.id for r in replies]
        liked = (
            await review_comment_crud.liked_ids(self.db, all_ids, viewer.id) if viewer else set()
        )

        nodes = {c.id: review_comment_dict(c, c.id in liked) for c in top_level}
        for reply in replies:
            nodes[reply.parent_id]["replies"].append(review_comment_dict(reply, reply.id in liked))
        return {
            "items": [nodes[c.id] for c in top_level],
            **page_meta(total, page, limit, len(top_level)),
        }

    async def create_comment(
        self,
        review_id: UUID,
        author: UserModel,
        content: str,
        parent_id: UUID | None = None,
    ) -> dict:
        """
        Comment on a review or reply to a top-level review comment.

        A top-level comment bumps the review's comment_count and notifies the
        review author; a reply notifies the parent comment's author. Both use
        REVIEW_COMMENT.

        Raises:
            NotFoundError: If the review or parent comment does not exist
            ValidationError: If replying to a reply
        """
        review = await review_crud.get_by_id(self.db, review_id)
        if review is None:
            raise NotFoundError("Review", review_id)

        parent = None
        if parent_id is not None:
            parent = await review_comment_crud.get_by_id(self.db, parent_id)
            if parent is None or parent.review_id != review_id:
                raise NotFoundError("Parent comment", parent_id)
            if parent.parent_id is not None:
                raise ValidationError("Replies cannot be nested further", field="parentId")

        comment = await review_comment_crud.create(
            self.db,
            content=content.strip(),
            author_id=author.id,
            review_id=review_id,
            parent_id=parent_id,
        )
        await self.db.refresh(comment, attribute_names=["author"])

        refs = {"review_id": review_id, "review_comment_id": comment.id}
        if parent is None:
            await review_crud.increment(self.db, review_id, "comment_count", 1)
            recipient = review.author_id
        else:
            recipient = parent.author_id
        await self.notifications.notify(
            recipient, author.id, NotificationType.REVIEW_COMMENT, **refs
        )

        logger.info(
            "Review comment created",
            extra={"review_comment_id": str(comment.id), "review_id": str(review_id)},
        )
        return review_comment_dict(comment)

    async def delete_comment(self, comment_id: UUID, user: UserModel) -> dict:
        """
        Delete a review comment and its replies.

        Raises:
            AuthorizationError: If the caller is neither author nor admin
        """
        comment = await self._get(comment_id)
        if comment.author_id != user.id and not user.is_admin:
            raise AuthorizationError("You can only delete your own comments")
        review_id, top_level = comment.review_id, comment.parent_id is None
        removed = await delete_entities(self.db, "review_comment", [comment_id])
        if top_level:
            await review_crud.increment(self.db, review_id, "comment_count", -1)
        return {"message": "Comment deleted successfully", "removed": removed}

    async def toggle_like(self, comment_id: UUID, user: UserModel) -> dict:
        """
        Like or unlike a review comment.

        Returns:
            dict: liked, like_count
        """
        comment = await self._get(comment_id)
        refs = {"review_id": comment.review_id, "review_comment_id": comment_id}
        if await review_comment_crud.remove_like(self.db, comment_id, user.id):
            liked = False
            await self.notifications.retract(
                comment.author_id, user.id, NotificationType.REVIEW_COMMENT_LIKE, **refs
            )
        else:
            await review_comment_crud.add_like(self.db, comment_id, user.id)
            liked = True
            await self.notifications.notify(
                comment.author_id, user.id, NotificationType.REVIEW_COMMENT_LIKE, **refs
            )
        return {
            "liked": liked,
            "like_count": await review_comment_crud.current_like_count(self.db, comment_id),
        }
