"""
User CRUD operations.

Lookups by login identifier, uniqueness checks, admin listings and the
karma recalculation query.

Dependencies: sqlalchemy, explorely.boundary.db.models
System role: User persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from explorely.boundary.db.base import utc_now
from explorely.boundary.db.CRUD.base_crud import BaseCRUD
from explorely.boundary.db.models.comment_model import CommentModel
from explorely.boundary.db.models.community_model import CommunityModel, community_members
from explorely.boundary.db.models.post_model import PostModel
from explorely.boundary.db.models.user_model import UserModel


class UserCRUD(BaseCRUD[UserModel]):
    """
    CRUD operations for UserModel.

    Extends BaseCRUD with identifier lookups and moderation queries.
    """

    def __init__(self) -> None:
        """Initialize UserCRUD with UserModel."""
        super().__init__(UserModel)

    async def get_by_email(self, session: AsyncSession, email: str) -> UserModel | None:
        """
        Retrieve user by email, case-insensitively.

        Args:
            session: Async database session
            email: Login email

        Returns:
            UserModel if found, None otherwise
        """
        stmt = select(UserModel).where(func.lower(UserModel.email) == email.lower())
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_username(self, session: AsyncSession, username: str) -> UserModel | None:
        """Retrieve user by exact username."""
        stmt = select(UserModel).where(UserModel.username == username)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_login(self, session: AsyncSession, identifier: str) -> UserModel | None:
        """
        Retrieve user by email or username.

        Args:
            session: Async database session
            identifier: Email address or username typed into the login form

        Returns:
            UserModel if found, None otherwise
        """
        stmt = select(UserModel).where(
            or_(
                func.lower(UserModel.email) == identifier.lower(),
                UserModel.username == identifier,
            )
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def email_taken(
        self,
        session: AsyncSession,
        email: str,
        exclude_id: UUID | None = None,
    ) -> bool:
        """Whether another account already uses this email."""
        stmt = select(UserModel.id).where(func.lower(UserModel.email) == email.lower())
        if exclude_id is not None:
            stmt = stmt.where(UserModel.id != exclude_id)
        result = await session.execute(stmt)
        return result.first() is not None

    async def username_taken(
        self,
        session: AsyncSession,
        username: str,
        exclude_id: UUID | None = None,
    ) -> bool:
        """Whether another account already uses this username."""
        stmt = select(UserModel.id).where(UserModel.username == username)
        if exclude_id is not None:
            stmt = stmt.where(UserModel.id != exclude_id)
        result = await session.execute(stmt)
        return result.first() is not None

    async def list_filtered(
        self,
        session: AsyncSession,
        limit: int,
        offset: int,
        search: str | None = None,
        reported_only: bool = False,
        banned: bool | None = None,
    ) -> tuple[list[UserModel], int]:
        """
        Admin listing of users.

        Args:
            session: Async database session
            limit: Page size
            offset: Rows to skip
            search: Substring matched against username, email and name
            reported_only: Restrict to users with report_count > 0
            banned: Restrict to banned (True) or active (False) users

        Returns:
            (users, total matches); reported listings sort by report count
        """
        stmt = select(UserModel)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    UserModel.username.ilike(pattern),
                    UserModel.email.ilike(pattern),
                    UserModel.name.ilike(pattern),
                )
            )
        if reported_only:
            stmt = stmt.where(UserModel.report_count > 0)
        if banned is not None:
            stmt = stmt.where(UserModel.is_banned == banned)
        if reported_only:
            stmt = stmt.order_by(UserModel.report_count.desc(), UserModel.created_at.desc())
        else:
            stmt = stmt.order_by(UserModel.created_at.desc(), UserModel.id)
        return await self.paginate(session, stmt, limit, offset)

    async def joined_communities(
        self,
        session: AsyncSession,
        user_id: UUID,
    ) -> Sequence[CommunityModel]:
        """Communities the user is a member of, alphabetically."""
        stmt = (
            select(CommunityModel)
            .join(community_members, community_members.c.community_id == CommunityModel.id)
            .where(community_members.c.user_id == user_id)
            .order_by(CommunityModel.name)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def recalculate_karma(self, session: AsyncSession, user_id: UUID) -> None:
        """
        Recompute karma counters from post votes and comment likes.

        Args:
            session: Async database session
            user_id: Owner of the karma
        """
        post_karma = select(func.coalesce(func.sum(PostModel.vote_count), 0)).where(
            PostModel.author_id == user_id
        ).scalar_subquery()
        comment_karma = select(func.coalesce(func.sum(CommentModel.like_count), 0)).where(
            CommentModel.author_id == user_id
        ).scalar_subquery()
        row = (await session.execute(select(post_karma, comment_karma))).one()
        await self.update_by_id(
            session,
            user_id,
            karma_post=row[0],
            karma_comment=row[1],
            karma_total=row[0] + row[1],
            karma_calculated_at=utc_now(),
        )


user_crud = UserCRUD()
