"""
Post service.

Posting into communities, feeds, voting and deletion. Voting keeps
vote_count derived from post_votes and drives POST_LIKE notifications.

Dependencies: sqlalchemy, explorely.boundary.db.CRUD, explorely.core
System role: Post use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from explorely.application.services.notification_service import NotificationService
from explorely.application.services.pagination import page_meta, page_offset
from explorely.application.services.serializers import post_dict
from explorely.boundary.db.CRUD.community_crud import community_crud
from explorely.boundary.db.CRUD.post_crud import post_crud
from explorely.boundary.db.CRUD.user_crud import user_crud
from explorely.boundary.db.models.notification_model import NotificationType
from explorely.boundary.db.models.post_model import PostModel
from explorely.boundary.db.models.user_model import UserModel
from explorely.core.deletion_policy import delete_entities
from explorely.core.exceptions import AuthorizationError, NotFoundError

logger = logging.getLogger(__name__)

UPVOTE = 1
DOWNVOTE = -1


class PostService:
    """Post orchestrator."""

    def __init__(self, db: AsyncSession, notifications: NotificationService) -> None:
        """
        Initialize post service.

        Args:
            db: Async SQLAlchemy session
            notifications: Fan-out for COMMUNITY_POST and POST_LIKE
        """
        self.db = db
        self.notifications = notifications

    async def _get(self, post_id: UUID) -> PostModel:
        post = await post_crud.get_by_id(self.db, post_id)
        if post is None:
            raise NotFoundError("Post", post_id)
        return post

    async def _page(
        self,
        posts: list[PostModel],
        total: int,
        page: int,
        limit: int,
        viewer: UserModel | None,
    ) -> dict:
        ids = [p.id for p in posts]
        votes = await post_crud.get_votes_for_user(self.db, ids, viewer.id) if viewer else {}
        comment_counts = await post_crud.comment_counts(self.db, ids)
        return {
            "items": [
                post_dict(p, votes.get(p.id, 0), comment_counts.get(p.id, 0)) for p in posts
            ],
            **page_meta(total, page, limit, len(posts)),
        }

    async def create_post(
        self,
        author: UserModel,
        community_id: UUID,
        title: str,
        content: str,
        media: list[str] | None = None,
    ) -> dict:
        """
        Publish a post in a community and notify its members.

        Args:
            author: Authenticated caller
            community_id: Target community
            title: Headline
            content: Body
            media: Media URLs

        Returns:
            dict: Created post

        Raises:
            NotFoundError: If the community does not exist
            AuthorizationError: If the caller is blocked or not a member
        """
        community = await community_crud.get_by_id(self.db, community_id)
        if community is None:
            raise NotFoundError("Community", community_id)
        if await community_crud.is_blocked(self.db, community_id, author.id):
            raise AuthorizationError("You have been blocked from this community")
        if not await community_crud.is_member(self.db, community_id, author.id):
            raise AuthorizationError("You must be a member of this community to post")

        post = await post_crud.create(
            self.db,
            title=title.strip(),
            content=content,
            media=media or [],
            author_id=author.id,
            community_id=community_id,
        )
        await self.db.refresh(post, attribute_names=["author", "community"])

        members = await community_crud.member_ids(self.db, community_id)
        await self.notifications.notify_many(
            members,
            author.id,
            NotificationType.COMMUNITY_POST,
            community_id=community_id,
            post_id=post.id,
        )

        logger.info(
            "Post created",
            extra={"post_id": str(post.id), "community_id": str(community_id)},
        )
        return post_dict(post)

    async def get_post(self, post_id: UUID, viewer: UserModel | None) -> dict:
        """Post detail with the viewer's vote and comment count."""
        post = await self._get(post_id)
        vote = await post_crud.get_vote(self.db, post_id, viewer.id) if viewer else None
        counts = await post_crud.comment_counts(self.db, [post_id])
        return post_dict(post, vote.value if vote else 0, counts.get(post_id, 0))

    async def home_feed(self, user: UserModel, page: int, limit: int) -> dict:
        """Posts from the caller's communities, highest voted then newest."""
        community_ids = await community_crud.joined_ids(self.db, user.id)
        posts, total = await post_crud.feed_for_communities(
            self.db, community_ids, limit, page_offset(page, limit)
        )
        return await self._page(posts, total, page, limit, user)

    async def public_feed(self, viewer: UserModel | None, page: int, limit: int) -> dict:
        """Posts from every public community."""
        posts, total = await post_crud.public_feed(self.db, limit, page_offset(page, limit))
        return await self._page(posts, total, page, limit, viewer)

    async def community_posts(
        self,
        community_id: UUID,
        viewer: UserModel | None,
        page: int,
        limit: int,
    ) -> dict:
        """
        Newest posts of a community.

        Raises:
            NotFoundError: If the community does not exist
            AuthorizationError: If the viewer is blocked
        """
        if await community_crud.get_by_id(self.db, community_id) is None:
            raise NotFoundError("Community", community_id)
        if viewer is not None and await community_crud.is_blocked(self.db, community_id, viewer.id):
            raise AuthorizationError("You have been blocked from this community")
        posts, total = await post_crud.list_by_community(
            self.db, community_id, limit, page_offset(page, limit)
        )
        return await self._page(posts, total, page, limit, viewer)

    async def vote(self, post_id: UUID, user: UserModel, direction: int) -> dict:
        """
        Toggle an upvote or downvote.

        Repeating the current vote removes it; voting the other way switches.
        A new upvote notifies the author (POST_LIKE); losing the upvote
        retracts that notification.

        Args:
            post_id: Post to vote on
            user: Authenticated caller
            direction: UPVOTE or DOWNVOTE

        Returns:
            dict: vote_count, upvotes, downvotes, user_vote
        """
        post = await self._get(post_id)
        existing = await post_crud.get_vote(self.db, post_id, user.id)
        previous = existing.value if existing else 0

        if previous == direction:
            await post_crud.remove_vote(self.db, post_id, user.id)
            current = 0
        else:
            await post_crud.set_vote(self.db, post_id, user.id, direction)
            current = direction

        vote_count = await post_crud.refresh_vote_count(self.db, post_id)
        upvotes, downvotes = await post_crud.vote_counts(self.db, post_id)

        if current == UPVOTE and previous != UPVOTE:
            await self.notifications.notify(
                post.author_id, user.id, NotificationType.POST_LIKE, post_id=post_id
            )
        elif previous == UPVOTE and current != UPVOTE:
            await self.notifications.retract(
                post.author_id, user.id, NotificationType.POST_LIKE, post_id=post_id
            )

        await user_crud.recalculate_karma(self.db, post.author_id)

        logger.info(
            "Post vote changed",
            extra={"post_id": str(post_id), "user_id": str(user.id), "vote": current},
        )
        return {
            "vote_count": vote_count,
            "upvotes": upvotes,
            "downvotes": downvotes,
            "user_vote": current,
        }

    async def delete_post(self, post_id: UUID, user: UserModel) -> dict:
        """
        Delete a post with its comments, votes and notifications.

        Raises:
            AuthorizationError: If the caller is neither author nor admin
        """
        post = await self._get(post_id)
        if post.author_id != user.id and not user.is_admin:
            raise AuthorizationError("You can only delete your own posts")
        author_id = post.author_id
        removed = await delete_entities(self.db, "post", [post_id])
        await user_crud.recalculate_karma(self.db, author_id)
        return {"message": "Post deleted successfully", "removed": removed}
