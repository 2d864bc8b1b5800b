"""
Search and explore schemas.

Dependencies: pydantic
System role: Discovery API contracts
"""

import uuid

from explorely.models.common import APIModel
from explorely.models.post import PostResponse


class CommunityCard(APIModel):
    """Community as listed by search and explore."""

    id: uuid.UUID
    name: str
    description: str
    avatar: str | None = None
    member_count: int
    post_count: int


class SearchResults(APIModel):
    posts: list[PostResponse] = []
    communities: list[CommunityCard] = []


class SearchResponse(APIModel):
    """Matches for one query; the list not asked for stays empty."""

    query: str
    type: str
    results: SearchResults


class TrendingPost(PostResponse):
    """Post with its vote tallies."""

    upvotes: int = 0
    downvotes: int = 0


class ExploreResponse(APIModel):
    """Explore page content."""

    trending_communities: list[CommunityCard]
    trending_posts: list[TrendingPost]
