"""
Notification CRUD operations.

Recipient-scoped reads with populated references, bulk seen/read updates,
duplicate detection and retention purge.

Dependencies: sqlalchemy, explorely.boundary.db.models
System role: Notification persistence operations
"""

from datetime import datetime
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from explorely.boundary.db.CRUD.base_crud import BaseCRUD
from explorely.boundary.db.models.notification_model import (
    NotificationModel,
    NotificationType,
)

REFERENCE_FIELDS = (
    "post_id",
    "comment_id",
    "review_id",
    "review_comment_id",
    "community_id",
    "itinerary_id",
)

_POPULATE = (
    selectinload(NotificationModel.sender),
    selectinload(NotificationModel.post),
    selectinload(NotificationModel.comment),
    selectinload(NotificationModel.review),
    selectinload(NotificationModel.review_comment),
    selectinload(NotificationModel.community),
    selectinload(NotificationModel.itinerary),
)


class NotificationCRUD(BaseCRUD[NotificationModel]):
    """CRUD operations for NotificationModel."""

    def __init__(self) -> None:
        """Initialize NotificationCRUD with NotificationModel."""
        super().__init__(NotificationModel)

    @staticmethod
    def _match(
        recipient_id: UUID,
        sender_id: UUID,
        type: NotificationType,
        refs: dict[str, Any],
    ) -> list:
        criteria = [
            NotificationModel.recipient_id == recipient_id,
            NotificationModel.sender_id == sender_id,
            NotificationModel.type == type,
        ]
        for field in REFERENCE_FIELDS:
            column = getattr(NotificationModel, field)
            value = refs.get(field)
            criteria.append(column.is_(None) if value is None else column == value)
        return criteria

    async def find_duplicate(
        self,
        session: AsyncSession,
        recipient_id: UUID,
        sender_id: UUID,
        type: NotificationType,
        refs: dict[str, Any],
        since: datetime,
    ) -> NotificationModel | None:
        """
        Identical notification created at or after since.

        Args:
            session: Async database session
            recipient_id: Addressee
            sender_id: Actor
            type: Notification type
            refs: Reference columns (missing keys mean unset)
            since: Start of the dedup window

        Returns:
            Existing notification if one matches, None otherwise
        """
        stmt = (
            select(NotificationModel)
            .where(*self._match(recipient_id, sender_id, type, refs))
            .where(NotificationModel.created_at >= since)
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_unread_matching(
        self,
        session: AsyncSession,
        recipient_id: UUID,
        sender_id: UUID,
        type: NotificationType,
        refs: dict[str, Any],
    ) -> int:
        """Delete identical notifications the recipient has not read yet."""
        stmt = delete(NotificationModel).where(
            *self._match(recipient_id, sender_id, type, refs),
            NotificationModel.is_read.is_(False),
        )
        result = await session.execute(stmt)
        return result.rowcount

    async def list_for_recipient(
        self,
        session: AsyncSession,
        recipient_id: UUID,
        limit: int,
        offset: int = 0,
    ) -> Sequence[NotificationModel]:
        """
        Newest notifications of one recipient with references loaded.

        Ordering is created_at DESC with id as tie-breaker so that
        consecutive pages never overlap.
        """
        stmt = (
            select(NotificationModel)
            .where(NotificationModel.recipient_id == recipient_id)
            .options(*_POPULATE)
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_for_recipient(self, session: AsyncSession, recipient_id: UUID) -> int:
        """All notifications of a recipient."""
        return await self.count(session, NotificationModel.recipient_id == recipient_id)

    async def count_unseen(self, session: AsyncSession, recipient_id: UUID) -> int:
        """Notifications the recipient has not seen in the dropdown."""
        return await self.count(
            session,
            NotificationModel.recipient_id == recipient_id,
            NotificationModel.is_seen.is_(False),
        )

    async def count_unread(self, session: AsyncSession, recipient_id: UUID) -> int:
        """Notifications the recipient has not opened."""
        return await self.count(
            session,
            NotificationModel.recipient_id == recipient_id,
            NotificationModel.is_read.is_(False),
        )

    async def mark_all_seen(self, session: AsyncSession, recipient_id: UUID) -> int:
        """Flag every unseen notification of the recipient as seen."""
        stmt = (
            update(NotificationModel)
            .where(
                NotificationModel.recipient_id == recipient_id,
                NotificationModel.is_seen.is_(False),
            )
            .values(is_seen=True)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount

    async def mark_all_read(self, session: AsyncSession, recipient_id: UUID) -> int:
        """Flag every unread notification of the recipient as read."""
        stmt = (
            update(NotificationModel)
            .where(
                NotificationModel.recipient_id == recipient_id,
                NotificationModel.is_read.is_(False),
            )
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount

    async def mark_read(
        self,
        session: AsyncSession,
        notification_id: UUID,
        recipient_id: UUID,
    ) -> bool:
        """
        Flag one notification as read, only if it belongs to recipient_id.

        Returns:
            True if the notification exists and is owned by the recipient
        """
        exists_stmt = select(NotificationModel.id).where(
            NotificationModel.id == notification_id,
            NotificationModel.recipient_id == recipient_id,
        )
        if (await session.execute(exists_stmt)).first() is None:
            return False
        await session.execute(
            update(NotificationModel)
            .where(NotificationModel.id == notification_id)
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        return True

    async def purge_older_than(self, session: AsyncSession, cutoff: datetime) -> int:
        """Delete notifications created before cutoff. Returns the number removed."""
        stmt = delete(NotificationModel).where(NotificationModel.created_at < cutoff)
        result = await session.execute(stmt)
        return result.rowcount


notification_crud = NotificationCRUD()
