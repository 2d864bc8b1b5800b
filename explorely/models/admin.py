"""
Admin moderation schemas.

Dependencies: pydantic
System role: Admin API contracts
"""

import uuid
from datetime import datetime

from explorely.boundary.db.models.review_model import ReviewCategory
from explorely.models.common import APIModel, CommunitySummary, UserSummary


class EntityTotals(APIModel):
    """Row counts per entity kind."""

    users: int
    communities: int
    posts: int
    comments: int
    reviews: int
    reports: int


class AdminStatsResponse(APIModel):
    """Platform-wide totals, recent activity and leading communities."""

    totals: EntityTotals
    last_30_days: EntityTotals
    banned_users: int
    pending_reports: int
    top_communities: list[CommunitySummary]


class ReportedMixin(APIModel):
    """Report aggregate attached to every admin listing row."""

    report_count: int = 0
    reports: list[str] = []


class AdminUserResponse(ReportedMixin):
    """User row in the admin console."""

    id: uuid.UUID
    email: str
    username: str
    name: str
    avatar: str
    is_admin: bool
    is_banned: bool
    karma_total: int
    created_at: datetime


class AdminCommunityResponse(ReportedMixin):
    """Community row in the admin console."""

    id: uuid.UUID
    name: str
    description: str
    avatar: str | None = None
    creator_id: uuid.UUID
    is_private: bool
    member_count: int
    post_count: int
    created_at: datetime


class AdminPostResponse(ReportedMixin):
    """Post row in the admin console."""

    id: uuid.UUID
    title: str
    content: str
    author: UserSummary
    community: CommunitySummary
    vote_count: int
    created_at: datetime


class AdminReviewResponse(ReportedMixin):
    """Review row in the admin console."""

    id: uuid.UUID
    title: str
    content: str
    location: str
    category: ReviewCategory
    rating: int
    author: UserSummary
    like_count: int
    created_at: datetime


class DeletionResponse(APIModel):
    """Result of a cascading delete."""

    message: str
    removed: dict[str, int]
