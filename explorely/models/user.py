"""
User profile schemas.

Dependencies: pydantic
System role: User API contracts
"""

import uuid
from datetime import datetime

from pydantic import Field

from explorely.models.common import APIModel, CommunitySummary


class KarmaResponse(APIModel):
    """Karma counters."""

    total: int = 0
    post: int = 0
    comment: int = 0
    last_calculated: datetime | None = None


class PublicUserResponse(APIModel):
    """Profile visible to everyone."""

    id: uuid.UUID
    username: str
    name: str
    avatar: str
    bio: str
    karma: KarmaResponse
    joined_communities: list[CommunitySummary] = []
    created_at: datetime


class UserProfileResponse(PublicUserResponse):
    """Own profile, including private fields."""

    email: str
    is_admin: bool
    is_banned: bool


class UpdateProfileRequest(APIModel):
    """Request schema for editing one's own profile."""

    name: str | None = Field(None, min_length=1, max_length=100)
    username: str | None = Field(None, min_length=1, max_length=30)
    bio: str | None = Field(None, max_length=500)
    avatar: str | None = Field(None, max_length=500)


class AdminCheckResponse(APIModel):
    """Whether the caller holds admin rights."""

    is_admin: bool
