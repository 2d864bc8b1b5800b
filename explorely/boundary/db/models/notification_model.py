"""
Notification ORM model.

One row per fan-out event, addressed to a single recipient. Reference
columns are nullable; each type fills exactly its own cluster.

Dependencies: sqlalchemy, explorely.boundary.db.base
System role: Notification persistence
"""

import enum
import uuid

from sqlalchemy import Boolean, Enum, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from explorely.boundary.db.base import Base, TimestampMixin, UUIDMixin
from explorely.boundary.db.models.comment_model import CommentModel
from explorely.boundary.db.models.community_model import CommunityModel
from explorely.boundary.db.models.itinerary_model import CommunityItineraryModel
from explorely.boundary.db.models.post_model import PostModel
from explorely.boundary.db.models.review_model import ReviewCommentModel, ReviewModel
from explorely.boundary.db.models.user_model import UserModel


class NotificationType(str, enum.Enum):
    """Domain events that produce a notification."""

    POST_LIKE = "POST_LIKE"
    POST_COMMENT = "POST_COMMENT"
    COMMENT_LIKE = "COMMENT_LIKE"
    COMMENT_REPLY = "COMMENT_REPLY"
    REVIEW_LIKE = "REVIEW_LIKE"
    REVIEW_COMMENT = "REVIEW_COMMENT"
    REVIEW_COMMENT_LIKE = "REVIEW_COMMENT_LIKE"
    COMMUNITY_POST = "COMMUNITY_POST"
    COMMUNITY_ITINERARY = "COMMUNITY_ITINERARY"


def _reference(target: str) -> Mapped[uuid.UUID | None]:
    return mapped_column(
        Uuid(as_uuid=True),
        ForeignKey(target, ondelete="CASCADE"),
        nullable=True,
    )


class NotificationModel(Base, UUIDMixin, TimestampMixin):
    """
    Notification ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        recipient_id: User the notification is addressed to
        sender_id: User whose action triggered it
        type: NotificationType
        post_id, comment_id, review_id, review_comment_id, community_id,
        itinerary_id: Optional references to the triggering entities
        is_read: Opened by the recipient
        is_seen: Shown in the recipient's dropdown
        created_at: Event time; drives ordering and retention

    Indexes:
        (recipient_id, created_at), (recipient_id, is_read), (recipient_id, is_seen)
    """

    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_recipient_created", "recipient_id", "created_at"),
        Index("ix_notifications_recipient_read", "recipient_id", "is_read"),
        Index("ix_notifications_recipient_seen", "recipient_id", "is_seen"),
    )

    recipient_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    sender_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    type: Mapped[NotificationType] = mapped_column(
        Enum(NotificationType, native_enum=False),
        nullable=False,
    )

    post_id: Mapped[uuid.UUID | None] = _reference("posts.id")
    comment_id: Mapped[uuid.UUID | None] = _reference("comments.id")
    review_id: Mapped[uuid.UUID | None] = _reference("reviews.id")
    review_comment_id: Mapped[uuid.UUID | None] = _reference("review_comments.id")
    community_id: Mapped[uuid.UUID | None] = _reference("communities.id")
    itinerary_id: Mapped[uuid.UUID | None] = _reference("community_itineraries.id")

    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_seen: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    sender: Mapped[UserModel] = relationship(
        UserModel,
        foreign_keys=[sender_id],
        viewonly=True,
        lazy="raise",
    )
    post: Mapped[PostModel | None] = relationship(PostModel, viewonly=True, lazy="raise")
    comment: Mapped[CommentModel | None] = relationship(
        CommentModel,
        viewonly=True,
        lazy="raise",
    )
    review: Mapped[ReviewModel | None] = relationship(ReviewModel, viewonly=True, lazy="raise")
    review_comment: Mapped[ReviewCommentModel | None] = relationship(
        ReviewCommentModel,
        viewonly=True,
        lazy="raise",
    )
    community: Mapped[CommunityModel | None] = relationship(
        CommunityModel,
        viewonly=True,
        lazy="raise",
    )
    itinerary: Mapped[CommunityItineraryModel | None] = relationship(
        CommunityItineraryModel,
        viewonly=True,
        lazy="raise",
    )
