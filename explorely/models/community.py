"""
Community schemas.

Dependencies: pydantic
System role: Community API contracts
"""

import uuid
from datetime import datetime

from pydantic import Field

from explorely.models.common import APIModel


class RuleRequest(APIModel):
    """One rule; order follows list position."""

    content: str = Field(..., min_length=1, max_length=500)


class RuleResponse(APIModel):
    """Stored rule."""

    order: int
    content: str


class CreateCommunityRequest(APIModel):
    """Request schema for creating a community."""

    name: str = Field(..., min_length=3, max_length=50)
    description: str = Field(..., min_length=1, max_length=1000)
    rules: list[RuleRequest] = Field(..., min_length=1)
    avatar: str | None = Field(None, max_length=500)
    banner: str | None = Field(None, max_length=500)
    is_private: bool = False


class UpdateCommunityRequest(APIModel):
    """Request schema for editing a community (creator only)."""

    description: str | None = Field(None, min_length=1, max_length=1000)
    rules: list[RuleRequest] | None = Field(None, min_length=1)
    avatar: str | None = Field(None, max_length=500)
    banner: str | None = Field(None, max_length=500)
    is_private: bool | None = None


class CommunityResponse(APIModel):
    """Community with counts and the caller's relationship to it."""

    id: uuid.UUID
    name: str
    description: str
    avatar: str | None = None
    banner: str | None = None
    creator_id: uuid.UUID
    is_private: bool
    rules: list[RuleResponse]
    member_count: int
    post_count: int
    is_member: bool = False
    is_moderator: bool = False
    is_creator: bool = False
    created_at: datetime


class MembershipResponse(APIModel):
    """Result of join/leave/toggle."""

    message: str
    action: str
    is_member: bool
    member_count: int
