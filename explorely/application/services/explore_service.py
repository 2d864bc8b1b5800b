"""
Explore service.

The explore page: largest communities and the posts voted highest over
the last day.

Dependencies: sqlalchemy, explorely.boundary.db.CRUD
System role: Discovery use case orchestration
"""

from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from explorely.application.services.serializers import community_card, post_dict
from explorely.boundary.db.base import utc_now
from explorely.boundary.db.CRUD.community_crud import community_crud
from explorely.boundary.db.CRUD.post_crud import post_crud
from explorely.boundary.db.models.user_model import UserModel

TRENDING_COMMUNITY_LIMIT = 6
TRENDING_POST_LIMIT = 10
TRENDING_POST_WINDOW = timedelta(hours=24)


class ExploreService:
    """Explore page orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def explore(self, viewer: UserModel | None) -> dict:
        """
        Trending communities and posts.

        Args:
            viewer: Caller, used for their votes on the posts listed

        Returns:
            dict: trending_communities, trending_posts (with up/down tallies)
        """
        communities = await community_crud.trending(self.db, TRENDING_COMMUNITY_LIMIT)
        posts = await post_crud.trending_since(
            self.db, utc_now() - TRENDING_POST_WINDOW, TRENDING_POST_LIMIT
        )

        ids = [p.id for p in posts]
        votes = await post_crud.get_votes_for_user(self.db, ids, viewer.id) if viewer else {}
        comment_counts = await post_crud.comment_counts(self.db, ids)
        tallies = await post_crud.vote_tallies(self.db, ids)

        trending_posts = []
        for post in posts:
            upvotes, downvotes = tallies.get(post.id, (0, 0))
            trending_posts.append(
                {
                    **post_dict(post, votes.get(post.id, 0), comment_counts.get(post.id, 0)),
                    "upvotes": upvotes,
                    "downvotes": downvotes,
                }
            )

        return {
            "trending_communities": [community_card(*row) for row in communities],
            "trending_posts": trending_posts,
        }
