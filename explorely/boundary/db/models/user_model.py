"""
User ORM model.

Stores identity, credential hash, profile fields, karma counters and
moderation flags for every platform account.

Dependencies: sqlalchemy, explorely.boundary.db.base
System role: Account persistence
"""

from datetime import datetime

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from explorely.boundary.db.base import Base, TimestampMixin, UTCDateTime, UUIDMixin

DEFAULT_AVATAR = "default-avatar.png"
DEFAULT_BIO = "New traveler exploring the world with Explorely!"


class UserModel(Base, UUIDMixin, TimestampMixin):
    """
    User ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        email: Login email (unique)
        username: Public handle (unique)
        name: Display name
        password_hash: bcrypt hash of the password
        avatar: Avatar image URL
        bio: Profile text (max 500 chars)
        is_admin: Grants access to moderation endpoints
        is_banned: Blocks login and every authenticated request
        karma_total: karma_post + karma_comment
        karma_post: Sum of vote counts across the user's posts
        karma_comment: Sum of likes across the user's comments
        karma_calculated_at: Last karma recalculation
        report_count: Open reports filed against this user

    Joined communities live in the community_members association table.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )
    username: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        unique=True,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    avatar: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        default=DEFAULT_AVATAR,
    )
    bio: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        default=DEFAULT_BIO,
    )
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_banned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    karma_total: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    karma_post: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    karma_comment: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    karma_calculated_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime(),
        nullable=True,
    )

    report_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        doc="Non-dismissed reports filed against this user",
    )
