"""
Itinerary ORM models.

Shared trip plans inside a community, their participants, and personal
itineraries owned by a single user. Activities, accommodations and
restaurants are stored as JSON lists of objects.

Dependencies: sqlalchemy, explorely.boundary.db.base
System role: Itinerary persistence
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Column, Enum, ForeignKey, Integer, JSON, String, Table, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from explorely.boundary.db.base import Base, TimestampMixin, UTCDateTime, UUIDMixin, utc_now
from explorely.boundary.db.models.user_model import UserModel


class ItineraryStatus(str, enum.Enum):
    """
    Trip lifecycle.

    UPCOMING: Dates are set and have not passed
    PLANNING: Still being put together
    COMPLETED: End date has passed
    """

    UPCOMING = "upcoming"
    PLANNING = "planning"
    COMPLETED = "completed"


itinerary_participants = Table(
    "itinerary_participants",
    Base.metadata,
    Column(
        "itinerary_id",
        Uuid(as_uuid=True),
        ForeignKey("community_itineraries.id", ondelete="CASCADE"),
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


class ItineraryFieldsMixin:
    """
    Columns shared by community and personal itineraries.

    Attributes:
        title: Plan name (max 200 chars)
        destination: Where the trip goes (max 100 chars)
        start_date: First day
        end_date: Last day, never before start_date
        duration: Free-form length ("5 days")
        travelers: Party size, at least 1
        description: Notes (max 1000 chars)
        activities: [{name, date, time, location, notes}]
        accommodations: [{name, check_in, check_out, location, ...}]
        restaurants: [{name, cuisine, location, ...}]
        status: upcoming, planning or completed
        progress: 0-100 completion estimate
        cover_image: Cover image URL
    """

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    destination: Mapped[str] = mapped_column(String(100), nullable=False)
    start_date: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    end_date: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    duration: Mapped[str | None] = mapped_column(String(50), nullable=True)
    travelers: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    activities: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    accommodations: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    restaurants: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    status: Mapped[ItineraryStatus] = mapped_column(
        Enum(ItineraryStatus, native_enum=False),
        nullable=False,
        default=ItineraryStatus.PLANNING,
    )
    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    cover_image: Mapped[str | None] = mapped_column(String(500), nullable=True)


class CommunityItineraryModel(Base, UUIDMixin, TimestampMixin, ItineraryFieldsMixin):
    """
    Trip plan shared inside a community that members can join.

    Attributes:
        author_id: Member who created the plan
        community_id: Community the plan belongs to

    Participants live in the itinerary_participants association table.
    """

    __tablename__ = "community_itineraries"

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

    author: Mapped[UserModel] = relationship(UserModel, viewonly=True, lazy="selectin")


class UserItineraryModel(Base, UUIDMixin, TimestampMixin, ItineraryFieldsMixin):
    """Personal trip plan visible only to its owner."""

    __tablename__ = "user_itineraries"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
