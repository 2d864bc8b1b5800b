"""
Post schemas.

Dependencies: pydantic
System role: Post API contracts
"""

import uuid
from datetime import datetime

from pydantic import Field

from explorely.models.common import APIModel, CommunitySummary, UserSummary


class CreatePostRequest(APIModel):
    """Request schema for creating a post in a community."""

    title: str = Field(..., min_length=1, max_length=300)
    content: str = Field(..., min_length=1, max_length=40000)
    community_id: uuid.UUID
    media: list[str] = Field(default_factory=list, max_length=10)


class PostResponse(APIModel):
    """Post with author, community and the caller's vote."""

    id: uuid.UUID
    title: str
    content: str
    media: list[str]
    author: UserSummary
    community: CommunitySummary
    vote_count: int
    user_vote: int = 0
    comment_count: int = 0
    created_at: datetime
    updated_at: datetime


class VoteResponse(APIModel):
    """Vote state after an upvote/downvote toggle."""

    vote_count: int
    upvotes: int
    downvotes: int
    user_vote: int
