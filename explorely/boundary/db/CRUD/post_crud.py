"""
Post CRUD operations.

Feeds, site search, trending posts, per-user votes and the
single-statement vote count refresh.

Dependencies: sqlalchemy, explorely.boundary.db.models
System role: Post persistence operations
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import case, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from explorely.boundary.db.CRUD.base_crud import BaseCRUD
from explorely.boundary.db.models.comment_model import CommentModel
from explorely.boundary.db.models.community_model import CommunityModel
from explorely.boundary.db.models.post_model import PostModel, PostVoteModel


class PostCRUD(BaseCRUD[PostModel]):
    """CRUD operations for PostModel and PostVoteModel."""

    def __init__(self) -> None:
        """Initialize PostCRUD with PostModel."""
        super().__init__(PostModel)

    @staticmethod
    def _feed_order(stmt):
        return stmt.order_by(
            PostModel.vote_count.desc(),
            PostModel.created_at.desc(),
            PostModel.id,
        )

    @staticmethod
    def _public(stmt):
        return stmt.join(CommunityModel, CommunityModel.id == PostModel.community_id).where(
            CommunityModel.is_private.is_(False)
        )

    async def feed_for_communities(
        self,
        session: AsyncSession,
        community_ids: Sequence[UUID],
        limit: int,
        offset: int,
    ) -> tuple[list[PostModel], int]:
        """
        Posts from the given communities, highest voted then newest first.

        Args:
            session: Async database session
            community_ids: Communities to include
            limit: Page size
            offset: Rows to skip

        Returns:
            (posts, total matches)
        """
        if not community_ids:
            return [], 0
        stmt = self._feed_order(
            select(PostModel).where(PostModel.community_id.in_(community_ids))
        )
        return await self.paginate(session, stmt, limit, offset)

    async def public_feed(
        self,
        session: AsyncSession,
        limit: int,
        offset: int,
    ) -> tuple[list[PostModel], int]:
        """Posts from non-private communities, same ordering as the home feed."""
        stmt = self._feed_order(self._public(select(PostModel)))
        return await self.paginate(session, stmt, limit, offset)

    async def list_by_community(
        self,
        session: AsyncSession,
        community_id: UUID,
        limit: int,
        offset: int,
    ) -> tuple[list[PostModel], int]:
        """Newest posts of one community."""
        stmt = (
            select(PostModel)
            .where(PostModel.community_id == community_id)
            .order_by(PostModel.created_at.desc(), PostModel.id)
        )
        return await self.paginate(session, stmt, limit, offset)

    async def list_filtered(
        self,
        session: AsyncSession,
        limit: int,
        offset: int,
        search: str | None = None,
        reported_only: bool = False,
    ) -> tuple[list[PostModel], int]:
        """Admin listing with optional text search and reported filter."""
        stmt = select(PostModel)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(PostModel.title.ilike(pattern), PostModel.content.ilike(pattern)))
        if reported_only:
            stmt = stmt.where(PostModel.report_count > 0).order_by(PostModel.report_count.desc())
        stmt = stmt.order_by(PostModel.created_at.desc(), PostModel.id)
        return await self.paginate(session, stmt, limit, offset)

    async def search(
        self,
        session: AsyncSession,
        text: str,
        limit: int,
    ) -> Sequence[PostModel]:
        """
        Public posts whose title or content contains text, case-insensitively.

        Title matches rank ahead of content-only matches; ties go to the
        higher voted, then the newer post.

        Args:
            session: Async database session
            text: Literal substring; LIKE wildcards are escaped
            limit: Maximum number of posts

        Returns:
            Matching posts, best first
        """
        in_title = PostModel.title.icontains(text, autoescape=True)
        stmt = (
            self._public(select(PostModel))
            .where(or_(in_title, PostModel.content.icontains(text, autoescape=True)))
            .order_by(
                case((in_title, 0), else_=1),
                PostModel.vote_count.desc(),
                PostModel.created_at.desc(),
                PostModel.id,
            )
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def trending_since(
        self,
        session: AsyncSession,
        since: datetime,
        limit: int,
    ) -> Sequence[PostModel]:
        """Highest voted public posts created at or after since."""
        stmt = (
            self._public(select(PostModel))
            .where(PostModel.created_at >= since)
            .order_by(PostModel.vote_count.desc(), PostModel.created_at.desc(), PostModel.id)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def comment_counts(
        self,
        session: AsyncSession,
        post_ids: Sequence[UUID],
    ) -> dict[UUID, int]:
        """Number of comments (all levels) per post."""
        if not post_ids:
            return {}
        stmt = (
            select(CommentModel.post_id, func.count(CommentModel.id))
            .where(CommentModel.post_id.in_(post_ids))
            .group_by(CommentModel.post_id)
        )
        result = await session.execute(stmt)
        return {row[0]: row[1] for row in result.all()}

    async def get_vote(
        self,
        session: AsyncSession,
        post_id: UUID,
        user_id: UUID,
    ) -> PostVoteModel | None:
        """The user's current vote on the post, if any."""
        stmt = select(PostVoteModel).where(
            PostVoteModel.post_id == post_id,
            PostVoteModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_votes_for_user(
        self,
        session: AsyncSession,
        post_ids: Sequence[UUID],
        user_id: UUID,
    ) -> dict[UUID, int]:
        """Vote values the user cast on each of post_ids."""
        if not post_ids:
            return {}
        stmt = select(PostVoteModel.post_id, PostVoteModel.value).where(
            PostVoteModel.post_id.in_(post_ids),
            PostVoteModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        return {row[0]: row[1] for row in result.all()}

    async def set_vote(
        self,
        session: AsyncSession,
        post_id: UUID,
        user_id: UUID,
        value: int,
    ) -> None:
        """Insert or overwrite the user's vote with value (+1 or -1)."""
        existing = await self.get_vote(session, post_id, user_id)
        if existing is None:
            session.add(PostVoteModel(post_id=post_id, user_id=user_id, value=value))
        else:
            existing.value = value
        await session.flush()

    async def remove_vote(self, session: AsyncSession, post_id: UUID, user_id: UUID) -> bool:
        """Delete the user's vote. Returns False if there was none."""
        stmt = delete(PostVoteModel).where(
            PostVoteModel.post_id == post_id,
            PostVoteModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def refresh_vote_count(self, session: AsyncSession, post_id: UUID) -> int:
        """
        Rewrite vote_count from post_votes in one UPDATE.

        Args:
            session: Async database session
            post_id: Post to refresh

        Returns:
            The new vote count
        """
        total = (
            select(func.coalesce(func.sum(PostVoteModel.value), 0))
            .where(PostVoteModel.post_id == post_id)
            .scalar_subquery()
        )
        await session.execute(
            update(PostModel)
            .where(PostModel.id == post_id)
            .values(vote_count=total)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(select(PostModel.vote_count).where(PostModel.id == post_id))
        return result.scalar_one()

    async def vote_counts(self, session: AsyncSession, post_id: UUID) -> tuple[int, int]:
        """(upvotes, downvotes) of a post."""
        stmt = select(
            func.count().filter(PostVoteModel.value > 0),
            func.count().filter(PostVoteModel.value < 0),
        ).where(PostVoteModel.post_id == post_id)
        row = (await session.execute(stmt)).one()
        return row[0], row[1]

    async def vote_tallies(
        self,
        session: AsyncSession,
        post_ids: Sequence[UUID],
    ) -> dict[UUID, tuple[int, int]]:
        """(upvotes, downvotes) per post, for posts with at least one vote."""
        if not post_ids:
            return {}
        stmt = (
            select(
                PostVoteModel.post_id,
                func.count().filter(PostVoteModel.value > 0),
                func.count().filter(PostVoteModel.value < 0),
            )
            .where(PostVoteModel.post_id.in_(post_ids))
            .group_by(PostVoteModel.post_id)
        )
        result = await session.execute(stmt)
        return {row[0]: (row[1], row[2]) for row in result.all()}


post_crud = PostCRUD()
