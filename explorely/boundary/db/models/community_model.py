"""
Community ORM models.

Communities, their ordered rule lists, and the membership, moderator and
blocked-member association tables.

Dependencies: sqlalchemy, explorely.boundary.db.base
System role: Community persistence
"""

import uuid

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Table, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from explorely.boundary.db.base import Base, TimestampMixin, UTCDateTime, UUIDMixin, utc_now


def _user_community_table(name: str) -> Table:
    return Table(
        name,
        Base.metadata,
        Column(
            "community_id",
            Uuid(as_uuid=True),
            ForeignKey("communities.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        Column(
            "user_id",
            Uuid(as_uuid=True),
            ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        Column("created_at", UTCDateTime(), nullable=False, default=utc_now),
    )


community_members = _user_community_table("community_members")
community_moderators = _user_community_table("community_moderators")
community_blocked_members = _user_community_table("community_blocked_members")


class CommunityRuleModel(Base, UUIDMixin):
    """
    One rule of a community, ordered by position.

    Attributes:
        community_id: Owning community
        position: 1-based display order
        content: Rule text (max 500 chars)
    """

    __tablename__ = "community_rules"

    community_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("communities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str] = mapped_column(String(500), nullable=False)


class CommunityModel(Base, UUIDMixin, TimestampMixin):
    """
    Community ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        name: Unique display name (max 50 chars)
        description: About text (max 1000 chars)
        avatar: Avatar image URL
        banner: Banner image URL
        creator_id: Owner; always a member and moderator
        is_private: Hidden from the public feed
        report_count: Non-dismissed reports filed against this community
        rules: Ordered rule list (loaded eagerly)
    """

    __tablename__ = "communities"

    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    avatar: Mapped[str | None] = mapped_column(String(500), nullable=True)
    banner: Mapped[str | None] = mapped_column(String(500), nullable=True)
    creator_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    is_private: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    report_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    rules: Mapped[list[CommunityRuleModel]] = relationship(
        CommunityRuleModel,
        order_by=CommunityRuleModel.position,
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )
