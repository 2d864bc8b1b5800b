"""
Comment ORM models.

Threaded post comments (at most three levels deep) and comment likes.

Dependencies: sqlalchemy, explorely.boundary.db.base
System role: Post comment persistence
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from explorely.boundary.db.base import Base, TimestampMixin, UTCDateTime, UUIDMixin, utc_now
from explorely.boundary.db.models.user_model import UserModel

MAX_COMMENT_LEVEL = 3


class CommentModel(Base, UUIDMixin, TimestampMixin):
    """
    Comment ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        content: Comment text (max 1000 chars)
        author_id: Writer
        post_id: Commented post
        parent_id: Parent comment for replies, None for top-level
        level: Depth in the thread, 0 for top-level
        like_count: Number of comment_likes rows
        is_edited: Set once the author edits the content
    """

    __tablename__ = "comments"

    content: Mapped[str] = mapped_column(String(1000), nullable=False)
    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    parent_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_edited: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    author: Mapped[UserModel] = relationship(UserModel, viewonly=True, lazy="selectin")


class CommentLikeModel(Base):
    """One user's like on one comment."""

    __tablename__ = "comment_likes"

    comment_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("comments.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, default=utc_now)
