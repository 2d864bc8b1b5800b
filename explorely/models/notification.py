"""
Notification schemas.

Dependencies: pydantic
System role: Notification delivery API contracts
"""

import uuid
from datetime import datetime

from explorely.boundary.db.models.notification_model import NotificationType
from explorely.models.common import APIModel


class NotificationSender(APIModel):
    """Actor who triggered the notification."""

    id: uuid.UUID
    username: str
    avatar: str | None = None


class TitledRef(APIModel):
    """Reference to a post, review or itinerary."""

    id: uuid.UUID
    title: str


class ContentRef(APIModel):
    """Reference to a comment or review comment."""

    id: uuid.UUID
    content: str


class NamedRef(APIModel):
    """Reference to a community."""

    id: uuid.UUID
    name: str


class NotificationResponse(APIModel):
    """Notification with its populated references."""

    id: uuid.UUID
    type: NotificationType
    sender: NotificationSender | None = None
    post: TitledRef | None = None
    comment: ContentRef | None = None
    review: TitledRef | None = None
    review_comment: ContentRef | None = None
    community: NamedRef | None = None
    itinerary: TitledRef | None = None
    is_read: bool
    is_seen: bool
    created_at: datetime


class RecentNotificationsResponse(APIModel):
    """Dropdown payload."""

    notifications: list[NotificationResponse]
    unseen_count: int
    unread_count: int


class NotificationPageResponse(APIModel):
    """One page of notification history."""

    notifications: list[NotificationResponse]
    page: int
    total: int
    has_more: bool
