"""
Comment service.

Threaded post comments: creation with POST_COMMENT / COMMENT_REPLY
fan-out, tree listing, edits, deletion and likes.

Dependencies: sqlalchemy, explorely.boundary.db.CRUD, explorely.core
System role: Comment use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from explorely.application.services.notification_service import NotificationService
from explorely.application.services.serializers import comment_dict
from explorely.boundary.db.CRUD.comment_crud import comment_crud
from explorely.boundary.db.CRUD.post_crud import post_crud
from explorely.boundary.db.CRUD.user_crud import user_crud
from explorely.boundary.db.models.comment_model import MAX_COMMENT_LEVEL, CommentModel
from explorely.boundary.db.models.notification_model import NotificationType
from explorely.boundary.db.models.user_model import UserModel
from explorely.core.deletion_policy import delete_entities
from explorely.core.exceptions import AuthorizationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class CommentService:
    """Comment orchestrator."""

    def __init__(self, db: AsyncSession, notifications: NotificationService) -> None:
        self.db = db
        self.notifications = notifications

    async def _get(self, comment_id: UUID) -> CommentModel:
        comment = await comment_crud.get_by_id(self.db, comment_id)
        if comment is None:
            raise NotFoundError("Comment", comment_id)
        return comment

    async def create_comment(
        self,
        post_id: UUID,
        author: UserModel,
        content: str,
        parent_id: UUID | None = None,
    ) -> dict:
        """
        Comment on a post or reply to a comment.

        Top-level comments notify the post author (POST_COMMENT). Replies
        notify the parent comment's author (COMMENT_REPLY) unless that author
        wrote the post or the replier is the post author.

        Args:
            post_id: Commented post
            author: Authenticated caller
            content: Comment text
            parent_id: Comment being replied to

        Returns:
            dict: Created comment

        Raises:
            NotFoundError: If the post or parent comment does not exist
            ValidationError: If the reply would exceed the maximum depth
        """
        post = await post_crud.get_by_id(self.db, post_id)
        if post is None:
            raise NotFoundError("Post", post_id)

        parent = None
        level = 0
        if parent_id is not None:
            parent = await comment_crud.get_by_id(self.db, parent_id)
            if parent is None or parent.post_id != post_id:
                raise NotFoundError("Parent comment", parent_id)
            level = parent.level + 1
            if level > MAX_COMMENT_LEVEL:
                raise ValidationError("Maximum reply depth reached", field="parentId")

        comment = await comment_crud.create(
            self.db,
            content=content.strip(),
            author_id=author.id,
            post_id=post_id,
            parent_id=parent_id,
            level=level,
        )
        await self.db.refresh(comment, attribute_names=["author"])

        if parent is None:
            await self.notifications.notify(
                post.author_id,
                author.id,
                NotificationType.POST_COMMENT,
                post_id=post_id,
                comment_id=comment.id,
            )
        elif parent.author_id != post.author_id and author.id != post.author_id:
            await self.notifications.notify(
                parent.author_id,
                author.id,
                NotificationType.COMMENT_REPLY,
                post_id=post_id,
                comment_id=comment.id,
            )

        logger.info(
            "Comment created",
            extra={"comment_id": str(comment.id), "post_id": str(post_id), "level": level},
        )
        return comment_dict(comment)

    async def list_comments(self, post_id: UUID, viewer: UserModel | None) -> list[dict]:
        """
        A post's comments as a tree of top-level comments with nested replies.

        Raises:
            NotFoundError: If the post does not exist
        """
        if not await post_crud.exists(self.db, post_id):
            raise NotFoundError("Post", post_id)
        comments = await comment_crud.list_by_post(self.db, post_id)
        liked = (
            await comment_crud.liked_ids(self.db, [c.id for c in comments], viewer.id)
            if viewer
            else set()
        )

        nodes = {c.id: comment_dict(c, c.id in liked) for c in comments}
        roots = []
        for comment in comments:
            node = nodes[comment.id]
            if comment.parent_id is not None and comment.parent_id in nodes:
                nodes[comment.parent_id]["replies"].append(node)
            else:
                roots.append(node)
        # Newest threads first, replies stay chronological
        roots.reverse()
        return roots

    async def update_comment(self, comment_id: UUID, user: UserModel, content: str) -> dict:
        """
        Edit one's own comment.

        Raises:
            AuthorizationError: If the caller did not write the comment
        """
        comment = await self._get(comment_id)
        if comment.author_id != user.id:
            raise AuthorizationError("You can only edit your own comments")
        comment.content = content.strip()
        comment.is_edited = True
        await self.db.flush()
        await self.db.refresh(comment)
        liked = await comment_crud.has_liked(self.db, comment_id, user.id)
        return comment_dict(comment, liked)

    async def delete_comment(self, comment_id: UUID, user: UserModel) -> dict:
        """
        Delete a comment and its reply subtree.

        Raises:
            AuthorizationError: If the caller is neither author nor admin
        """
        comment = await self._get(comment_id)
        if comment.author_id != user.id and not user.is_admin:
            raise AuthorizationError("You can only delete your own comments")
        author_id = comment.author_id
        removed = await delete_entities(self.db, "comment", [comment_id])
        await user_crud.recalculate_karma(self.db, author_id)
        return {"message": "Comment deleted successfully", "removed": removed}

    async def toggle_like(self, comment_id: UUID, user: UserModel) -> dict:
        """
        Like or unlike a comment.

        Returns:
            dict: liked, like_count
        """
        comment = await self._get(comment_id)
        refs = {"post_id": comment.post_id, "comment_id": comment_id}

        if await comment_crud.remove_like(self.db, comment_id, user.id):
            liked = False
            await self.notifications.retract(
                comment.author_id, user.id, NotificationType.COMMENT_LIKE, **refs
            )
        else:
            await comment_crud.add_like(self.db, comment_id, user.id)
            liked = True
            await self.notifications.notify(
                comment.author_id, user.id, NotificationType.COMMENT_LIKE, **refs
            )

        await user_crud.recalculate_karma(self.db, comment.author_id)
        return {
            "liked": liked,
            "like_count": await comment_crud.current_like_count(self.db, comment_id),
        }
