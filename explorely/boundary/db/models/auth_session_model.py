"""
Authentication session ORM model.

Server-side session row referenced by the `sid` claim of a bearer token.
The row is the source of truth: deleting it revokes the token.

Dependencies: sqlalchemy, explorely.boundary.db.base
System role: Session store for the authentication provider
"""

import uuid
from datetime import datetime

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from explorely.boundary.db.base import Base, TimestampMixin, UTCDateTime, UUIDMixin


class AuthSessionModel(Base, UUIDMixin, TimestampMixin):
    """
    Login session.

    Attributes:
        id: Session ID, carried as `sid` in the bearer token
        user_id: Authenticated principal
        expires_at: Idle expiry, pushed forward on each authenticated request
        last_activity_at: Timestamp of the most recent authenticated request
        user_agent: Client user agent at login
        ip_address: Client address at login
    """

    __tablename__ = "auth_sessions"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    expires_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        index=True,
    )
    last_activity_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    user_agent: Mapped[str | None] = mapped_column(String(500), nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)
