"""
Itinerary service.

Community trip plans (members create and join them) and personal
itineraries. Activities, accommodations and restaurants are JSON lists
edited by index.

Dependencies: sqlalchemy, explorely.boundary.db.CRUD, explorely.core
System role: Itinerary use case orchestration
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from explorely.application.services.notification_service import NotificationService
from explorely.application.services.serializers import user_summary
from explorely.boundary.db.base import utc_now
from explorely.boundary.db.CRUD.community_crud import community_crud
from explorely.boundary.db.CRUD.itinerary_crud import (
    community_itinerary_crud,
    user_itinerary_crud,
)
from explorely.boundary.db.models.itinerary_model import (
    CommunityItineraryModel,
    ItineraryStatus,
    UserItineraryModel,
)
from explorely.boundary.db.models.notification_model import NotificationType
from explorely.boundary.db.models.user_model import UserModel
from explorely.core.deletion_policy import delete_entities
from explorely.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

SECTIONS = {
    "activities": "Activity",
    "accommodations": "Accommodation",
    "restaurants": "Restaurant",
}


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def check_dates(start_date: datetime, end_date: datetime) -> None:
    """
    Reject a range that ends before it starts.

    Raises:
        ValidationError: If end_date precedes start_date
    """
    if _as_utc(end_date) < _as_utc(start_date):
        raise ValidationError("End date cannot be before start date", field="endDate")


def resolve_status(
    status: ItineraryStatus,
    end_date: datetime,
    now: datetime | None = None,
) -> ItineraryStatus:
    """Stored status: completed once the end date has passed, else as requested."""
    now = now or utc_now()
    if _as_utc(end_date) < now:
        return ItineraryStatus.COMPLETED
    return status


def itinerary_dict(itinerary: CommunityItineraryModel | UserItineraryModel) -> dict:
    """Fields shared by both itinerary kinds."""
    return {
        "id": itinerary.id,
        "title": itinerary.title,
        "destination": itinerary.destination,
        "start_date": itinerary.start_date,
        "end_date": itinerary.end_date,
        "duration": itinerary.duration,
        "travelers": itinerary.travelers,
        "description": itinerary.description,
        "activities": list(itinerary.activities or []),
        "accommodations": list(itinerary.accommodations or []),
        "restaurants": list(itinerary.restaurants or []),
        "status": itinerary.status,
        "progress": itinerary.progress,
        "cover_image": itinerary.cover_image,
        "created_at": itinerary.created_at,
        "updated_at": itinerary.updated_at,
    }


def _apply_fields(itinerary, fields: dict) -> None:
    for key, value in fields.items():
        setattr(itinerary, key, value)
    check_dates(itinerary.start_date, itinerary.end_date)
    itinerary.status = resolve_status(itinerary.status, itinerary.end_date)


def _check_section(section: str) -> None:
    if section not in SECTIONS:
        raise ValidationError(f"Unknown itinerary section: {section}", field="section")


def _check_index(items: list, index: int, section: str) -> None:
    if index < 0 or index >= len(items):
        raise NotFoundError(SECTIONS[section], index)


class CommunityItineraryService:
    """Community itinerary orchestrator."""

    def __init__(self, db: AsyncSession, notifications: NotificationService) -> None:
        """
        Initialize community itinerary service.

        Args:
            db: Async SQLAlchemy session
            notifications: Fan-out for COMMUNITY_ITINERARY
        """
        self.db = db
        self.notifications = notifications

    async def _get(self, itinerary_id: UUID) -> CommunityItineraryModel:
        itinerary = await community_itinerary_crud.get_by_id(self.db, itinerary_id)
        if itinerary is None:
            raise NotFoundError("Itinerary", itinerary_id)
        return itinerary

    async def _get_own(self, itinerary_id: UUID, user: UserModel) -> CommunityItineraryModel:
        itinerary = await self._get(itinerary_id)
        if itinerary.author_id != user.id:
            raise AuthorizationError("Only the author can modify this itinerary")
        return itinerary

    async def _to_dict(
        self,
        itinerary: CommunityItineraryModel,
        viewer: UserModel | None,
        participant_count: int | None = None,
        is_joined: bool | None = None,
    ) -> dict:
        if participant_count is None or is_joined is None:
            participants = await community_itinerary_crud.participant_ids(self.db, itinerary.id)
            participant_count = len(participants)
            is_joined = viewer is not None and viewer.id in participants
        return {
            **itinerary_dict(itinerary),
            "community_id": itinerary.community_id,
            "author": user_summary(itinerary.author),
            "participant_count": participant_count,
            "is_joined": is_joined,
        }

    async def create_itinerary(self, community_id: UUID, author: UserModel, fields: dict) -> dict:
        """
        Share a trip plan in a community and notify its members.

        Args:
            community_id: Target community
            author: Authenticated caller
            fields: Itinerary column values

        Returns:
            dict: Created itinerary

        Raises:
            NotFoundError: If the community does not exist
            AuthorizationError: If the caller is not a member
            ValidationError: If the date range is invalid
        """
        if await community_crud.get_by_id(self.db, community_id) is None:
            raise NotFoundError("Community", community_id)
        if not await community_crud.is_member(self.db, community_id, author.id):
            raise AuthorizationError("You must be a member of this community to share itineraries")

        check_dates(fields["start_date"], fields["end_date"])
        fields["status"] = resolve_status(
            fields.get("status", ItineraryStatus.PLANNING), fields["end_date"]
        )
        itinerary = await community_itinerary_crud.create(
            self.db, author_id=author.id, community_id=community_id, **fields
        )
        await self.db.refresh(itinerary, attribute_names=["author"])

        members = await community_crud.member_ids(self.db, community_id)
        await self.notifications.notify_many(
            members,
            author.id,
            NotificationType.COMMUNITY_ITINERARY,
            community_id=community_id,
            itinerary_id=itinerary.id,
        )
        logger.info(
            "Community itinerary created",
            extra={"itinerary_id": str(itinerary.id), "community_id": str(community_id)},
        )
        return await self._to_dict(itinerary, author, 0, False)

    async def list_itineraries(self, community_id: UUID, viewer: UserModel | None) -> list[dict]:
        """Itineraries of a community with participant counts."""
        if await community_crud.get_by_id(self.db, community_id) is None:
            raise NotFoundError("Community", community_id)
        itineraries = await community_itinerary_crud.list_by_community(self.db, community_id)
        counts = await community_itinerary_crud.participant_counts(
            self.db, [i.id for i in itineraries]
        )
        results = []
        for itinerary in itineraries:
            joined = False
            if viewer is not None and counts.get(itinerary.id):
                joined = viewer.id in await community_itinerary_crud.participant_ids(
                    self.db, itinerary.id
                )
            results.append(
                await self._to_dict(itinerary, viewer, counts.get(itinerary.id, 0), joined)
            )
        return results

    async def get_itinerary(self, itinerary_id: UUID, viewer: UserModel | None) -> dict:
        """Itinerary detail."""
        return await self._to_dict(await self._get(itinerary_id), viewer)

    async def update_itinerary(self, itinerary_id: UUID, user: UserModel, fields: dict) -> dict:
        """
        Edit an itinerary the caller authored.

        Raises:
            AuthorizationError: If the caller is not the author
            ValidationError: If the resulting date range is invalid
        """
        itinerary = await self._get_own(itinerary_id, user)
        _apply_fields(itinerary, fields)
        await self.db.flush()
        await self.db.refresh(itinerary)
        return await self._to_dict(itinerary, user)

    async def delete_itinerary(self, itinerary_id: UUID, user: UserModel) -> dict:
        """Delete an itinerary the caller authored (admins may delete any)."""
        itinerary = await self._get(itinerary_id)
        if itinerary.author_id != user.id and not user.is_admin:
            raise AuthorizationError("Only the author can delete this itinerary")
        removed = await delete_entities(self.db, "community_itinerary", [itinerary_id])
        return {"message": "Itinerary deleted successfully", "removed": removed}

    async def join(self, itinerary_id: UUID, user: UserModel) -> dict:
        """
        Join an itinerary as a participant.

        Raises:
            AuthorizationError: If the caller is not a community member
            ConflictError: If already joined
        """
        itinerary = await self._get(itinerary_id)
        if not await community_crud.is_member(self.db, itinerary.community_id, user.id):
            raise AuthorizationError("You must be a member of this community to join")
        if not await community_itinerary_crud.add_participant(self.db, itinerary_id, user.id):
            raise ConflictError("You have already joined this itinerary")
        return await self._to_dict(itinerary, user)

    async def leave(self, itinerary_id: UUID, user: UserModel) -> dict:
        """
        Leave an itinerary.

        Raises:
            ValidationError: If the caller had not joined
        """
        itinerary = await self._get(itinerary_id)
        if not await community_itinerary_crud.remove_participant(self.db, itinerary_id, user.id):
            raise ValidationError("You have not joined this itinerary")
        return await self._to_dict(itinerary, user)

    async def add_activity(self, itinerary_id: UUID, user: UserModel, activity: dict) -> dict:
        """Append an activity to an itinerary the caller authored."""
        itinerary = await self._get_own(itinerary_id, user)
        itinerary.activities = [*itinerary.activities, activity]
        await self.db.flush()
        await self.db.refresh(itinerary)
        return await self._to_dict(itinerary, user)

    async def remove_activity(self, itinerary_id: UUID, user: UserModel, index: int) -> dict:
        """
        Remove the activity at index.

        Raises:
            NotFoundError: If index is out of range
        """
        itinerary = await self._get_own(itinerary_id, user)
        activities = list(itinerary.activities)
        _check_index(activities, index, "activities")
        del activities[index]
        itinerary.activities = activities
        await self.db.flush()
        await self.db.refresh(itinerary)
        return await self._to_dict(itinerary, user)


class UserItineraryService:
    """Personal itinerary orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _get_own(self, itinerary_id: UUID, user: UserModel) -> UserItineraryModel:
        itinerary = await user_itinerary_crud.get_by_id(self.db, itinerary_id)
        # Someone else's plan is indistinguishable from a missing one
        if itinerary is None or itinerary.user_id != user.id:
            raise NotFoundError("Itinerary", itinerary_id)
        return itinerary

    async def _save(self, itinerary: UserItineraryModel) -> dict:
        await self.db.flush()
        await self.db.refresh(itinerary)
        return itinerary_dict(itinerary)

    async def create_itinerary(self, user: UserModel, fields: dict) -> dict:
        """
        Create a personal itinerary.

        Raises:
            ValidationError: If the date range is invalid
        """
        check_dates(fields["start_date"], fields["end_date"])
        fields["status"] = resolve_status(
            fields.get("status", ItineraryStatus.PLANNING), fields["end_date"]
        )
        itinerary = await user_itinerary_crud.create(self.db, user_id=user.id, **fields)
        logger.info("User itinerary created", extra={"itinerary_id": str(itinerary.id)})
        return itinerary_dict(itinerary)

    async def list_itineraries(self, user: UserModel) -> list[dict]:
        """The caller's itineraries."""
        itineraries = await user_itinerary_crud.list_by_user(self.db, user.id)
        return [itinerary_dict(i) for i in itineraries]

    async def get_itinerary(self, itinerary_id: UUID, user: UserModel) -> dict:
        return itinerary_dict(await self._get_own(itinerary_id, user))

    async def update_itinerary(self, itinerary_id: UUID, user: UserModel, fields: dict) -> dict:
        itinerary = await self._get_own(itinerary_id, user)
        _apply_fields(itinerary, fields)
        return await self._save(itinerary)

    async def delete_itinerary(self, itinerary_id: UUID, user: UserModel) -> dict:
        await self._get_own(itinerary_id, user)
        await user_itinerary_crud.delete_by_id(self.db, itinerary_id)
        return {"message": "Itinerary deleted successfully"}

    async def add_item(self, itinerary_id: UUID, user: UserModel, section: str, item: dict) -> dict:
        """
        Append an entry to activities, accommodations or restaurants.

        Args:
            itinerary_id: Caller's itinerary
            user: Authenticated caller
            section: List to append to
            item: Entry as stored JSON

        Returns:
            dict: Updated itinerary
        """
        _check_section(section)
        itinerary = await self._get_own(itinerary_id, user)
        setattr(itinerary, section, [*getattr(itinerary, section), item])
        return await self._save(itinerary)

    async def update_item(
        self,
        itinerary_id: UUID,
        user: UserModel,
        section: str,
        index: int,
        item: dict,
    ) -> dict:
        """Replace the entry at index of a section."""
        _check_section(section)
        itinerary = await self._get_own(itinerary_id, user)
        items = list(getattr(itinerary, section))
        _check_index(items, index, section)
        items[index] = item
        setattr(itinerary, section, items)
        return await self._save(itinerary)

    async def remove_item(self, itinerary_id: UUID, user: UserModel, section: str, index: int) -> dict:
        """Remove the entry at index of a section."""
        _check_section(section)
        itinerary = await self._get_own(itinerary_id, user)
        items = list(getattr(itinerary, section))
        _check_index(items, index, section)
        del items[index]
        setattr(itinerary, section, items)
        return await self._save(itinerary)
