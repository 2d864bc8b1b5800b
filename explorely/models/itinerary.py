"""
Itinerary schemas.

Dependencies: pydantic
System role: Itinerary API contracts
"""

import uuid
from datetime import datetime

from pydantic import Field

from explorely.boundary.db.models.itinerary_model import ItineraryStatus
from explorely.models.common import APIModel, UserSummary


class Activity(APIModel):
    """One planned activity."""

    name: str = Field(..., min_length=1, max_length=200)
    date: str | None = None
    time: str | None = None
    location: str | None = Field(None, max_length=200)
    notes: str | None = Field(None, max_length=1000)
    cost: float | None = None


class Accommodation(APIModel):
    """One place to stay."""

    name: str = Field(..., min_length=1, max_length=200)
    location: str | None = Field(None, max_length=200)
    check_in: str | None = None
    check_out: str | None = None
    notes: str | None = Field(None, max_length=1000)
    price: float | None = None


class Restaurant(APIModel):
    """One place to eat."""

    name: str = Field(..., min_length=1, max_length=200)
    location: str | None = Field(None, max_length=200)
    cuisine: str | None = Field(None, max_length=100)
    notes: str | None = Field(None, max_length=1000)
    price_range: str | None = Field(None, max_length=20)


class CreateItineraryRequest(APIModel):
    """Request schema for creating an itinerary."""

    title: str = Field(..., min_length=1, max_length=200)
    destination: str = Field(..., min_length=1, max_length=100)
    start_date: datetime
    end_date: datetime
    duration: str | None = Field(None, max_length=50)
    travelers: int = Field(1, ge=1)
    description: str | None = Field(None, max_length=1000)
    activities: list[Activity] = Field(default_factory=list)
    accommodations: list[Accommodation] = Field(default_factory=list)
    restaurants: list[Restaurant] = Field(default_factory=list)
    status: ItineraryStatus = ItineraryStatus.PLANNING
    progress: int = Field(0, ge=0, le=100)
    cover_image: str | None = Field(None, max_length=500)


class UpdateItineraryRequest(APIModel):
    """Request schema for editing an itinerary; omitted fields stay unchanged."""

    title: str | None = Field(None, min_length=1, max_length=200)
    destination: str | None = Field(None, min_length=1, max_length=100)
    start_date: datetime | None = None
    end_date: datetime | None = None
    duration: str | None = Field(None, max_length=50)
    travelers: int | None = Field(None, ge=1)
    description: str | None = Field(None, max_length=1000)
    activities: list[Activity] | None = None
    accommodations: list[Accommodation] | None = None
    restaurants: list[Restaurant] | None = None
    status: ItineraryStatus | None = None
    progress: int | None = Field(None, ge=0, le=100)
    cover_image: str | None = Field(None, max_length=500)


class ItineraryResponse(APIModel):
    """Personal itinerary."""

    id: uuid.UUID
    title: str
    destination: str
    start_date: datetime
    end_date: datetime
    duration: str | None = None
    travelers: int
    description: str | None = None
    activities: list[dict]
    accommodations: list[dict]
    restaurants: list[dict]
    status: ItineraryStatus
    progress: int
    cover_image: str | None = None
    created_at: datetime
    updated_at: datetime


class CommunityItineraryResponse(ItineraryResponse):
    """Community itinerary with author and participation."""

    community_id: uuid.UUID
    author: UserSummary
    participant_count: int = 0
    is_joined: bool = False
