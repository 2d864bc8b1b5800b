"""
Notification service.

Fan-out (writing notifications when domain events happen) and delivery
(recent dropdown, paged history, seen/read flags) for the caller's own
notifications. Retention purge lives here too.

Dependencies: sqlalchemy, explorely.boundary.db.CRUD, explorely.configs
System role: Notification use case orchestration
"""

import logging
from datetime import timedelta
from typing import Iterable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from explorely.application.services.pagination import page_offset
from explorely.boundary.db.base import utc_now
from explorely.boundary.db.CRUD.notification_crud import (
    REFERENCE_FIELDS,
    notification_crud,
)
from explorely.boundary.db.models.notification_model import (
    NotificationModel,
    NotificationType,
)
from explorely.configs.notifications import NotificationSettings
from explorely.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)

# Reference columns each notification type may carry
REFERENCE_CLUSTERS: dict[NotificationType, frozenset[str]] = {
    NotificationType.POST_LIKE: frozenset({"post_id"}),
    NotificationType.POST_COMMENT: frozenset({"post_id", "comment_id"}),
    NotificationType.COMMENT_LIKE: frozenset({"post_id", "comment_id"}),
    NotificationType.COMMENT_REPLY: frozenset({"post_id", "comment_id"}),
    NotificationType.REVIEW_LIKE: frozenset({"review_id"}),
    NotificationType.REVIEW_COMMENT: frozenset({"review_id", "review_comment_id"}),
    NotificationType.REVIEW_COMMENT_LIKE: frozenset({"review_id", "review_comment_id"}),
    NotificationType.COMMUNITY_POST: frozenset({"community_id", "post_id"}),
    NotificationType.COMMUNITY_ITINERARY: frozenset({"community_id", "itinerary_id"}),
}


def check_references(type: NotificationType, refs: dict[str, UUID | None]) -> dict[str, UUID]:
    """
    Validate that refs fill exactly the cluster of type.

    Args:
        type: Notification type
        refs: Reference column values

    Returns:
        dict: refs without None values

    Raises:
        ValueError: If a reference is missing or belongs to another cluster
    """
    present = {key: value for key, value in refs.items() if value is not None}
    unknown = set(present) - set(REFERENCE_FIELDS)
    if unknown:
        raise ValueError(f"Unknown notification references: {sorted(unknown)}")
    expected = REFERENCE_CLUSTERS[type]
    if set(present) != expected:
        raise ValueError(
            f"{type.value} requires references {sorted(expected)}, got {sorted(present)}"
        )
    return present


def notification_dict(notification: NotificationModel) -> dict:
    """Notification with populated references; only the type's cluster is filled."""
    sender = notification.sender
    return {
        "id": notification.id,
        "type": notification.type,
        "sender": (
            {"id": sender.id, "username": sender.username, "avatar": sender.avatar}
            if sender is not None
            else None
        ),
        "post": (
            {"id": notification.post.id, "title": notification.post.title}
            if notification.post is not None
            else None
        ),
        "comment": (
            {"id": notification.comment.id, "content": notification.comment.content}
            if notification.comment is not None
            else None
        ),
        "review": (
            {"id": notification.review.id, "title": notification.review.title}
            if notification.review is not None
            else None
        ),
        "review_comment": (
            {
                "id": notification.review_comment.id,
                "content": notification.review_comment.content,
            }
            if notification.review_comment is not None
            else None
        ),
        "community": (
            {"id": notification.community.id, "name": notification.community.name}
            if notification.community is not None
            else None
        ),
        "itinerary": (
            {"id": notification.itinerary.id, "title": notification.itinerary.title}
            if notification.itinerary is not None
            else None
        ),
        "is_read": notification.is_read,
        "is_seen": notification.is_seen,
        "created_at": notification.created_at,
    }


class NotificationService:
    """Notification fan-out and delivery."""

    def __init__(self, db: AsyncSession, settings: NotificationSettings) -> None:
        """
        Initialize notification service.

        Args:
            db: Async SQLAlchemy session
            settings: Page sizes, dedup window and retention
        """
        self.db = db
        self.settings = settings

    async def notify(
        self,
        recipient_id: UUID,
        sender_id: UUID,
        type: NotificationType,
        **refs: UUID | None,
    ) -> NotificationModel | None:
        """
        Write one notification for a domain event.

        Self-notifications are skipped. An identical notification inside the
        dedup window is returned instead of writing a second one.

        Args:
            recipient_id: User to notify
            sender_id: User who acted
            type: Event kind
            **refs: Reference columns of the type's cluster

        Returns:
            NotificationModel, or None when recipient and sender coincide

        Raises:
            ValueError: If refs do not match the type's cluster
        """
        refs = check_references(type, refs)
        if recipient_id == sender_id:
            return None

        since = utc_now() - timedelta(hours=self.settings.dedup_window_hours)
        existing = await notification_crud.find_duplicate(
            self.db, recipient_id, sender_id, type, refs, since
        )
        if existing is not None:
            logger.debug(
                "Duplicate notification suppressed",
                extra={"notification_id": str(existing.id), "type": type.value},
            )
            return existing

        notification = await notification_crud.create(
            self.db,
            recipient_id=recipient_id,
            sender_id=sender_id,
            type=type,
            **refs,
        )
        logger.info(
            "Notification created",
            extra={
                "notification_id": str(notification.id),
                "type": type.value,
                "recipient_id": str(recipient_id),
                "sender_id": str(sender_id),
            },
        )
        return notification

    async def notify_many(
        self,
        recipient_ids: Iterable[UUID],
        sender_id: UUID,
        type: NotificationType,
        **refs: UUID | None,
    ) -> int:
        """
        Fan a creation event out to several recipients.

        Args:
            recipient_ids: Users to notify; the sender is skipped
            sender_id: User who acted
            type: Event kind
            **refs: Reference columns of the type's cluster

        Returns:
            int: Number of notifications written
        """
        refs = check_references(type, refs)
        recipients = {rid for rid in recipient_ids if rid != sender_id}
        for recipient_id in recipients:
            self.db.add(
                NotificationModel(
                    recipient_id=recipient_id,
                    sender_id=sender_id,
                    type=type,
                    **refs,
                )
            )
        await self.db.flush()
        logger.info(
            "Notifications fanned out",
            extra={"type": type.value, "sender_id": str(sender_id), "count": len(recipients)},
        )
        return len(recipients)

    async def retract(
        self,
        recipient_id: UUID,
        sender_id: UUID,
        type: NotificationType,
        **refs: UUID | None,
    ) -> int:
        """
        Remove the unread notification of an undone action (unlike, unvote).

        Returns:
            int: Number of notifications removed
        """
        refs = check_references(type, refs)
        if recipient_id == sender_id:
            return 0
        removed = await notification_crud.delete_unread_matching(
            self.db, recipient_id, sender_id, type, refs
        )
        if removed:
            logger.info(
                "Notification retracted",
                extra={"type": type.value, "recipient_id": str(recipient_id), "removed": removed},
            )
        return removed

    async def get_recent(self, user_id: UUID) -> dict:
        """
        Newest notifications and badge counters for the dropdown.

        Args:
            user_id: Authenticated caller

        Returns:
            dict: notifications, unseen_count, unread_count
        """
        notifications = await notification_crud.list_for_recipient(
            self.db, user_id, limit=self.settings.recent_limit
        )
        return {
            "notifications": [notification_dict(n) for n in notifications],
            "unseen_count": await notification_crud.count_unseen(self.db, user_id),
            "unread_count": await notification_crud.count_unread(self.db, user_id),
        }

    async def get_page(self, user_id: UUID, page: int) -> dict:
        """
        One page of notification history, newest first.

        Args:
            user_id: Authenticated caller
            page: 1-based page number

        Returns:
            dict: notifications, page, total, has_more
        """
        page = max(page, 1)
        limit = self.settings.page_size
        skip = page_offset(page, limit)
        notifications = await notification_crud.list_for_recipient(
            self.db, user_id, limit=limit, offset=skip
        )
        total = await notification_crud.count_for_recipient(self.db, user_id)
        return {
            "notifications": [notification_dict(n) for n in notifications],
            "page": page,
            "total": total,
            "has_more": skip + len(notifications) < total,
        }

    async def mark_all_seen(self, user_id: UUID) -> int:
        """Flag all of the caller's notifications as seen."""
        updated = await notification_crud.mark_all_seen(self.db, user_id)
        logger.info("Notifications marked seen", extra={"user_id": str(user_id), "count": updated})
        return updated

    async def mark_all_read(self, user_id: UUID) -> int:
        """Flag all of the caller's notifications as read."""
        updated = await notification_crud.mark_all_read(self.db, user_id)
        logger.info("Notifications marked read", extra={"user_id": str(user_id), "count": updated})
        return updated

    async def mark_read(self, user_id: UUID, notification_id: UUID) -> None:
        """
        Flag one of the caller's notifications as read.

        Raises:
            NotFoundError: If the notification does not exist or is someone else's
        """
        if not await notification_crud.mark_read(self.db, notification_id, user_id):
            raise NotFoundError("Notification", notification_id)

    async def purge_expired(self) -> int:
        """
        Delete notifications older than the retention period.

        Returns:
            int: Number of notifications removed
        """
        cutoff = utc_now() - timedelta(days=self.settings.retention_days)
        removed = await notification_crud.purge_older_than(self.db, cutoff)
        logger.info(
            "Notification retention purge",
            extra={"cutoff": cutoff.isoformat(), "removed": removed},
        )
        return removed
