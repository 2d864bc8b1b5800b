"""
Review ORM models.

Place reviews (restaurants, hotels, attractions), review likes, threaded
review comments and review comment likes.

Dependencies: sqlalchemy, explorely.boundary.db.base
System role: Review persistence
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Enum, ForeignKey, Integer, JSON, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from explorely.boundary.db.base import Base, TimestampMixin, UTCDateTime, UUIDMixin, utc_now
from explorely.boundary.db.models.user_model import UserModel


class ReviewCategory(str, enum.Enum):
    """Kinds of place a review can describe."""

    RESTAURANT = "Restaurant"
    HOTEL = "Hotel"
    ATTRACTION = "Attraction"


class ReviewModel(Base, UUIDMixin, TimestampMixin):
    """
    Review ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        title: Headline (max 200 chars)
        content: Review body
        author_id: Writer
        location: Reviewed place
        user_city: Writer's home city
        user_country: Writer's home country
        category: Restaurant, Hotel or Attraction
        rating: 1 to 5 stars
        images: List of image URLs
        like_count: Number of review_likes rows
        comment_count: Number of top-level review comments
        report_count: Non-dismissed reports filed against this review
    """

    __tablename__ = "reviews"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    location: Mapped[str] = mapped_column(String(200), nullable=False)
    user_city: Mapped[str] = mapped_column(String(100), nullable=False)
    user_country: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[ReviewCategory] = mapped_column(
        Enum(ReviewCategory, native_enum=False),
        nullable=False,
        index=True,
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    images: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    comment_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    report_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    author: Mapped[UserModel] = relationship(UserModel, viewonly=True, lazy="selectin")


class ReviewLikeModel(Base):
    """One user's like on one review."""

    __tablename__ = "review_likes"

    review_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("reviews.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, default=utc_now)


class ReviewCommentModel(Base, UUIDMixin, TimestampMixin):
    """
    Comment on a review, optionally replying to another review comment.

    Attributes:
        content: Comment text (max 1000 chars)
        author_id: Writer
        review_id: Commented review
        parent_id: Parent review comment for replies
        like_count: Number of review_comment_likes rows
    """

    __tablename__ = "review_comments"

    content: Mapped[str] = mapped_column(String(1000), nullable=False)
    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    review_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("reviews.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    parent_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("review_comments.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    author: Mapped[UserModel] = relationship(UserModel, viewonly=True, lazy="selectin")


class ReviewCommentLikeModel(Base):
    """One user's like on one review comment."""

    __tablename__ = "review_comment_likes"

    review_comment_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("review_comments.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, default=utc_now)
