"""
Review schemas.

Dependencies: pydantic
System role: Review and review comment API contracts
"""

import uuid
from datetime import datetime

from pydantic import Field

from explorely.boundary.db.models.review_model import ReviewCategory
from explorely.models.common import APIModel, UserSummary


class CreateReviewRequest(APIModel):
    """Request schema for writing a review."""

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=5000)
    location: str = Field(..., min_length=1, max_length=200)
    user_city: str = Field(..., min_length=1, max_length=100)
    user_country: str = Field(..., min_length=1, max_length=100)
    category: ReviewCategory
    rating: int = Field(..., ge=1, le=5)
    images: list[str] = Field(default_factory=list, max_length=10)


class ReviewResponse(APIModel):
    """Review with author and the caller's like state."""

    id: uuid.UUID
    title: str
    content: str
    location: str
    user_city: str
    user_country: str
    category: ReviewCategory
    rating: int
    images: list[str]
    author: UserSummary
    like_count: int
    comment_count: int
    is_liked: bool = False
    created_at: datetime


class CreateReviewCommentRequest(APIModel):
    """Request schema for commenting on a review or replying to a review comment."""

    content: str = Field(..., min_length=1, max_length=1000)
    parent_id: uuid.UUID | None = None


class ReviewCommentResponse(APIModel):
    """Review comment with direct replies."""

    id: uuid.UUID
    content: str
    author: UserSummary
    review_id: uuid.UUID
    parent_id: uuid.UUID | None = None
    like_count: int
    is_liked: bool = False
    created_at: datetime
    replies: list["ReviewCommentResponse"] = []
