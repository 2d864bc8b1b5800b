"""
Comment schemas.

Dependencies: pydantic
System role: Post comment API contracts
"""

import uuid
from datetime import datetime

from pydantic import Field

from explorely.models.common import APIModel, UserSummary


class CreateCommentRequest(APIModel):
    """Request schema for commenting on a post or replying to a comment."""

    content: str = Field(..., min_length=1, max_length=1000)
    parent_id: uuid.UUID | None = None


class UpdateCommentRequest(APIModel):
    """Request schema for editing one's own comment."""

    content: str = Field(..., min_length=1, max_length=1000)


class CommentResponse(APIModel):
    """Comment node with nested replies."""

    id: uuid.UUID
    content: str
    author: UserSummary
    post_id: uuid.UUID
    parent_id: uuid.UUID | None = None
    level: int
    like_count: int
    is_liked: bool = False
    is_edited: bool = False
    created_at: datetime
    replies: list["CommentResponse"] = []


class LikeResponse(APIModel):
    """Like state after a toggle or status check."""

    liked: bool
    like_count: int
