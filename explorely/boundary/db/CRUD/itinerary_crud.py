"""
Itinerary CRUD operations.

Community itineraries with their participant rows, and personal itineraries.

Dependencies: sqlalchemy, explorely.boundary.db.models
System role: Itinerary persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from explorely.boundary.db.CRUD.base_crud import BaseCRUD
from explorely.boundary.db.models.itinerary_model import (
    CommunityItineraryModel,
    UserItineraryModel,
    itinerary_participants,
)


class CommunityItineraryCRUD(BaseCRUD[CommunityItineraryModel]):
    """CRUD operations for CommunityItineraryModel."""

    def __init__(self) -> None:
        """Initialize CommunityItineraryCRUD with CommunityItineraryModel."""
        super().__init__(CommunityItineraryModel)

    async def list_by_community(
        self,
        session: AsyncSession,
        community_id: UUID,
    ) -> Sequence[CommunityItineraryModel]:
        """Itineraries of a community, soonest start first."""
        stmt = (
            select(CommunityItineraryModel)
            .where(CommunityItineraryModel.community_id == community_id)
            .order_by(CommunityItineraryModel.start_date, CommunityItineraryModel.id)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def participant_ids(self, session: AsyncSession, itinerary_id: UUID) -> list[UUID]:
        """Users who joined the itinerary."""
        stmt = select(itinerary_participants.c.user_id).where(
            itinerary_participants.c.itinerary_id == itinerary_id
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def participant_counts(
        self,
        session: AsyncSession,
        itinerary_ids: Sequence[UUID],
    ) -> dict[UUID, int]:
        """Number of participants per itinerary."""
        if not itinerary_ids:
            return {}
        stmt = (
            select(itinerary_participants.c.itinerary_id, func.count())
            .where(itinerary_participants.c.itinerary_id.in_(itinerary_ids))
            .group_by(itinerary_participants.c.itinerary_id)
        )
        result = await session.execute(stmt)
        return {row[0]: row[1] for row in result.all()}

    async def add_participant(self, session: AsyncSession, itinerary_id: UUID, user_id: UUID) -> bool:
        """Join the itinerary. Returns False if already joined."""
        if user_id in await self.participant_ids(session, itinerary_id):
            return False
        await session.execute(
            insert(itinerary_participants).values(itinerary_id=itinerary_id, user_id=user_id)
        )
        return True

    async def remove_participant(
        self,
        session: AsyncSession,
        itinerary_id: UUID,
        user_id: UUID,
    ) -> bool:
        """Leave the itinerary. Returns False if not joined."""
        stmt = delete(itinerary_participants).where(
            itinerary_participants.c.itinerary_id == itinerary_id,
            itinerary_participants.c.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.rowcount > 0


class UserItineraryCRUD(BaseCRUD[UserItineraryModel]):
    """CRUD operations for UserItineraryModel."""

    def __init__(self) -> None:
        """Initialize UserItineraryCRUD with UserItineraryModel."""
        super().__init__(UserItineraryModel)

    async def list_by_user(
        self,
        session: AsyncSession,
        user_id: UUID,
    ) -> Sequence[UserItineraryModel]:
        """Personal itineraries of a user, soonest start first."""
        stmt = (
            select(UserItineraryModel)
            .where(UserItineraryModel.user_id == user_id)
            .order_by(UserItineraryModel.start_date, UserItineraryModel.id)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


community_itinerary_crud = CommunityItineraryCRUD()
user_itinerary_crud = UserItineraryCRUD()
