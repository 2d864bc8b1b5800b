"""
Report ORM model.

User-submitted moderation reports against a user, post, review or
community. Exactly one reported_* column is set, matching reported_type.

Dependencies: sqlalchemy, explorely.boundary.db.base
System role: Moderation report persistence
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Enum, ForeignKey, Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from explorely.boundary.db.base import Base, TimestampMixin, UTCDateTime, UUIDMixin
from explorely.boundary.db.models.user_model import UserModel


class ReportedType(str, enum.Enum):
    """Entity kinds that can be reported."""

    USER = "user"
    POST = "post"
    REVIEW = "review"
    COMMUNITY = "community"


class ReportReason(str, enum.Enum):
    """Reasons offered to reporters."""

    HARASSMENT = "Harassment or bullying"
    HATE_SPEECH = "Hate speech or symbols"
    MISINFORMATION = "Misinformation"
    SPAM = "Spam"
    INAPPROPRIATE = "Inappropriate content"


class ReportStatus(str, enum.Enum):
    """
    Moderation workflow states.

    PENDING: Awaiting admin review
    REVIEWED: Looked at, decision outstanding
    RESOLVED: Action taken
    DISMISSED: No action needed; no longer counts against the item
    """

    PENDING = "pending"
    REVIEWED = "reviewed"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


REPORTED_COLUMNS = {
    ReportedType.USER: "reported_user_id",
    ReportedType.POST: "reported_post_id",
    ReportedType.REVIEW: "reported_review_id",
    ReportedType.COMMUNITY: "reported_community_id",
}


class ReportModel(Base, UUIDMixin, TimestampMixin):
    """
    Report ORM model.

    Attributes:
        reporter_id: User who filed the report
        reported_type: Kind of the reported entity
        reported_user_id, reported_post_id, reported_review_id,
        reported_community_id: The reported entity (one is set)
        reason: ReportReason
        status: ReportStatus, starts as PENDING
        admin_notes: Free-text notes editable by admins
        resolved_by_id: Admin who last changed the status
        resolved_at: When the status was last changed
    """

    __tablename__ = "reports"
    __table_args__ = (
        Index("ix_reports_status_type", "status", "reported_type"),
    )

    reporter_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    reported_type: Mapped[ReportedType] = mapped_column(
        Enum(ReportedType, native_enum=False),
        nullable=False,
    )
    reported_user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    reported_post_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    reported_review_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("reviews.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    reported_community_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("communities.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    reason: Mapped[ReportReason] = mapped_column(
        Enum(ReportReason, native_enum=False),
        nullable=False,
    )
    status: Mapped[ReportStatus] = mapped_column(
        Enum(ReportStatus, native_enum=False),
        nullable=False,
        default=ReportStatus.PENDING,
    )
    admin_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    resolved_by_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    resolved_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)

    reporter: Mapped[UserModel] = relationship(
        UserModel,
        foreign_keys=[reporter_id],
        viewonly=True,
        lazy="selectin",
    )

    @property
    def reported_item_id(self) -> uuid.UUID | None:
        """ID of the reported entity, whichever column holds it."""
        return getattr(self, REPORTED_COLUMNS[self.reported_type])
