"""
Post ORM models.

Community posts and per-user votes. vote_count is derived from post_votes
and rewritten in a single UPDATE after each vote change.

Dependencies: sqlalchemy, explorely.boundary.db.base
System role: Post persistence
"""

import uuid
from datetime import datetime

from sqlalchemy import ForeignKey, Integer, JSON, SmallInteger, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from explorely.boundary.db.base import Base, TimestampMixin, UTCDateTime, UUIDMixin, utc_now
from explorely.boundary.db.models.community_model import CommunityModel
from explorely.boundary.db.models.user_model import UserModel


class PostModel(Base, UUIDMixin, TimestampMixin):
    """
    Post ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        title: Headline (max 300 chars)
        content: Body (max 40000 chars)
        media: List of media URLs
        author_id: Writer
        community_id: Community the post belongs to
        vote_count: Upvotes minus downvotes
        report_count: Non-dismissed reports filed against this post
    """

    __tablename__ = "posts"

    title: Mapped[str] = mapped_column(String(300), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    media: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    community_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("communities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    vote_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    report_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    author: Mapped[UserModel] = relationship(UserModel, viewonly=True, lazy="selectin")
    community: Mapped[CommunityModel] = relationship(
        CommunityModel,
        viewonly=True,
        lazy="selectin",
    )


class PostVoteModel(Base):
    """
    One user's vote on one post.

    Attributes:
        post_id: Voted post
        user_id: Voter
        value: +1 for an upvote, -1 for a downvote
    """

    __tablename__ = "post_votes"

    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    value: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, default=utc_now)
