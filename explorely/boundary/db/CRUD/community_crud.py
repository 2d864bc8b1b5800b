"""
Community CRUD operations.

Membership, moderator and block-list association rows, counters, site
search and the top and trending community rankings.

Dependencies: sqlalchemy, explorely.boundary.db.models
System role: Community persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Table, case, delete, func, insert, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from explorely.boundary.db.CRUD.base_crud import BaseCRUD
from explorely.boundary.db.models.community_model import (
    CommunityModel,
    community_blocked_members,
    community_members,
    community_moderators,
)
from explorely.boundary.db.models.post_model import PostModel


def member_count_expr():
    """Correlated subquery counting members of CommunityModel."""
    return (
        select(func.count())
        .select_from(community_members)
        .where(community_members.c.community_id == CommunityModel.id)
        .correlate(CommunityModel)
        .scalar_subquery()
    )


def post_count_expr():
    """Correlated subquery counting posts of CommunityModel."""
    return (
        select(func.count(PostModel.id))
        .where(PostModel.community_id == CommunityModel.id)
        .correlate(CommunityModel)
        .scalar_subquery()
    )


class CommunityCRUD(BaseCRUD[CommunityModel]):
    """
    CRUD operations for CommunityModel.

    Association tables are written with Core inserts and deletes; each
    call is a single statement.
    """

    def __init__(self) -> None:
        """Initialize CommunityCRUD with CommunityModel."""
        super().__init__(CommunityModel)

    async def get_by_name(self, session: AsyncSession, name: str) -> CommunityModel | None:
        """Retrieve community by case-insensitive name."""
        stmt = select(CommunityModel).where(func.lower(CommunityModel.name) == name.lower())
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def _has_row(
        self,
        session: AsyncSession,
        table: Table,
        community_id: UUID,
        user_id: UUID,
    ) -> bool:
        stmt = select(table.c.user_id).where(
            table.c.community_id == community_id,
            table.c.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.first() is not None

    async def _add_row(
        self,
        session: AsyncSession,
        table: Table,
        community_id: UUID,
        user_id: UUID,
    ) -> bool:
        if await self._has_row(session, table, community_id, user_id):
            return False
        await session.execute(insert(table).values(community_id=community_id, user_id=user_id))
        return True

    async def _remove_row(
        self,
        session: AsyncSession,
        table: Table,
        community_id: UUID,
        user_id: UUID,
    ) -> bool:
        stmt = delete(table).where(
            table.c.community_id == community_id,
            table.c.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def is_member(self, session: AsyncSession, community_id: UUID, user_id: UUID) -> bool:
        """Whether user_id belongs to the community."""
        return await self._has_row(session, community_members, community_id, user_id)

    async def add_member(self, session: AsyncSession, community_id: UUID, user_id: UUID) -> bool:
        """Add a member. Returns False if already a member."""
        return await self._add_row(session, community_members, community_id, user_id)

    async def remove_member(self, session: AsyncSession, community_id: UUID, user_id: UUID) -> bool:
        """Remove a member. Returns False if not a member."""
        return await self._remove_row(session, community_members, community_id, user_id)

    async def is_moderator(self, session: AsyncSession, community_id: UUID, user_id: UUID) -> bool:
        """Whether user_id moderates the community."""
        return await self._has_row(session, community_moderators, community_id, user_id)

    async def add_moderator(self, session: AsyncSession, community_id: UUID, user_id: UUID) -> bool:
        """Grant moderator rights. Returns False if already a moderator."""
        return await self._add_row(session, community_moderators, community_id, user_id)

    async def remove_moderator(
        self,
        session: AsyncSession,
        community_id: UUID,
        user_id: UUID,
    ) -> bool:
        """Revoke moderator rights."""
        return await self._remove_row(session, community_moderators, community_id, user_id)

    async def is_blocked(self, session: AsyncSession, community_id: UUID, user_id: UUID) -> bool:
        """Whether user_id is on the community block list."""
        return await self._has_row(session, community_blocked_members, community_id, user_id)

    async def block(self, session: AsyncSession, community_id: UUID, user_id: UUID) -> bool:
        """Add to the block list. Returns False if already blocked."""
        return await self._add_row(session, community_blocked_members, community_id, user_id)

    async def unblock(self, session: AsyncSession, community_id: UUID, user_id: UUID) -> bool:
        """Remove from the block list. Returns False if not blocked."""
        return await self._remove_row(session, community_blocked_members, community_id, user_id)

    async def member_ids(self, session: AsyncSession, community_id: UUID) -> list[UUID]:
        """IDs of every member of the community."""
        stmt = select(community_members.c.user_id).where(
            community_members.c.community_id == community_id
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def moderator_ids(self, session: AsyncSession, community_id: UUID) -> list[UUID]:
        """IDs of every moderator of the community."""
        stmt = select(community_moderators.c.user_id).where(
            community_moderators.c.community_id == community_id
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def blocked_ids(self, session: AsyncSession, community_id: UUID) -> list[UUID]:
        """IDs of every blocked user of the community."""
        stmt = select(community_blocked_members.c.user_id).where(
            community_blocked_members.c.community_id == community_id
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def joined_ids(self, session: AsyncSession, user_id: UUID) -> list[UUID]:
        """IDs of every community user_id has joined."""
        stmt = select(community_members.c.community_id).where(
            community_members.c.user_id == user_id
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def member_count(self, session: AsyncSession, community_id: UUID) -> int:
        """Number of members."""
        stmt = (
            select(func.count())
            .select_from(community_members)
            .where(community_members.c.community_id == community_id)
        )
        return (await session.execute(stmt)).scalar_one()

    async def post_count(self, session: AsyncSession, community_id: UUID) -> int:
        """Number of posts."""
        stmt = select(func.count(PostModel.id)).where(PostModel.community_id == community_id)
        return (await session.execute(stmt)).scalar_one()

    async def list_with_counts(
        self,
        session: AsyncSession,
        limit: int,
        offset: int,
        search: str | None = None,
        reported_only: bool = False,
    ) -> tuple[list[tuple[CommunityModel, int, int]], int]:
        """
        Page of communities with member and post counts.

        Args:
            session: Async database session
            limit: Page size
            offset: Rows to skip
            search: Substring matched against name and description
            reported_only: Restrict to communities with report_count > 0

        Returns:
            ([(community, member_count, post_count)], total matches)
        """
        stmt = select(CommunityModel, member_count_expr(), post_count_expr())
        count_stmt = select(func.count(CommunityModel.id))
        if search:
            pattern = f"%{search}%"
            clause = or_(
                CommunityModel.name.ilike(pattern),
                CommunityModel.description.ilike(pattern),
            )
            stmt = stmt.where(clause)
            count_stmt = count_stmt.where(clause)
        if reported_only:
            stmt = stmt.where(CommunityModel.report_count > 0).order_by(
                CommunityModel.report_count.desc()
            )
            count_stmt = count_stmt.where(CommunityModel.report_count > 0)
        stmt = stmt.order_by(CommunityModel.created_at.desc(), CommunityModel.id)

        total = (await session.execute(count_stmt)).scalar_one()
        result = await session.execute(stmt.limit(limit).offset(offset))
        return [(row[0], row[1], row[2]) for row in result.all()], total

    async def top_communities(
        self,
        session: AsyncSession,
        limit: int = 3,
    ) -> list[tuple[CommunityModel, int, int]]:
        """
        Communities ranked by members + 2 * posts.

        Args:
            session: Async database session
            limit: Number of communities to return

        Returns:
            [(community, member_count, post_count)] highest score first
        """
        members = member_count_expr()
        posts = post_count_expr()
        stmt = (
            select(CommunityModel, members, posts)
            .order_by((members + 2 * posts).desc(), CommunityModel.created_at)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return [(row[0], row[1], row[2]) for row in result.all()]

    async def search(
        self,
        session: AsyncSession,
        text: str,
        limit: int,
    ) -> list[tuple[CommunityModel, int, int]]:
        """
        Communities whose name or description contains text, case-insensitively.

        Name matches rank ahead of description-only matches, then larger
        communities first.

        Args:
            session: Async database session
            text: Literal substring; LIKE wildcards are escaped
            limit: Maximum number of communities

        Returns:
            [(community, member_count, post_count)] best first
        """
        members = member_count_expr()
        in_name = CommunityModel.name.icontains(text, autoescape=True)
        stmt = (
            select(CommunityModel, members, post_count_expr())
            .where(or_(in_name, CommunityModel.description.icontains(text, autoescape=True)))
            .order_by(case((in_name, 0), else_=1), members.desc(), CommunityModel.name)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return [(row[0], row[1], row[2]) for row in result.all()]

    async def trending(
        self,
        session: AsyncSession,
        limit: int,
    ) -> list[tuple[CommunityModel, int, int]]:
        """Communities with the most members, newest first on ties."""
        members = member_count_expr()
        stmt = (
            select(CommunityModel, members, post_count_expr())
            .order_by(members.desc(), CommunityModel.created_at.desc(), CommunityModel.id)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return [(row[0], row[1], row[2]) for row in result.all()]

    async def list_for_ids(
        self,
        session: AsyncSession,
        ids: Sequence[UUID],
    ) -> Sequence[CommunityModel]:
        """Communities whose ID is in ids."""
        if not ids:
            return []
        stmt = select(CommunityModel).where(CommunityModel.id.in_(ids))
        result = await session.execute(stmt)
        return result.scalars().all()


community_crud = CommunityCRUD()
