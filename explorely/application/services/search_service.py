"""
Search service.

Site-wide search over posts and communities.

Dependencies: sqlalchemy, explorely.boundary.db.CRUD, explorely.core
System role: Search use case orchestration
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from explorely.application.services.serializers import community_card, post_dict
from explorely.boundary.db.CRUD.community_crud import community_crud
from explorely.boundary.db.CRUD.post_crud import post_crud
from explorely.boundary.db.models.user_model import UserModel
from explorely.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

SEARCH_TYPES = ("all", "posts", "communities")
RESULT_LIMIT = 10


class SearchService:
    """Search orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def search(self, query: str, search_type: str, viewer: UserModel | None) -> dict:
        """
        Find posts and communities containing query.

        Args:
            query: Text to look for; surrounding whitespace is ignored
            search_type: "all", "posts" or "communities", any case
            viewer: Caller, used for their votes on the posts found

        Returns:
            dict: query, type, results {posts, communities}

        Raises:
            ValidationError: If query is blank or search_type is unknown
        """
        text = query.strip()
        if not text:
            raise ValidationError("Search query is required", field="query")
        search_type = search_type.strip().lower()
        if search_type not in SEARCH_TYPES:
            raise ValidationError(
                "Search type must be one of: " + ", ".join(SEARCH_TYPES), field="type"
            )

        results: dict = {"posts": [], "communities": []}
        if search_type in ("all", "posts"):
            posts = await post_crud.search(self.db, text, RESULT_LIMIT)
            ids = [p.id for p in posts]
            votes = await post_crud.get_votes_for_user(self.db, ids, viewer.id) if viewer else {}
            comment_counts = await post_crud.comment_counts(self.db, ids)
            results["posts"] = [
                post_dict(p, votes.get(p.id, 0), comment_counts.get(p.id, 0)) for p in posts
            ]
        if search_type in ("all", "communities"):
            rows = await community_crud.search(self.db, text, RESULT_LIMIT)
            results["communities"] = [community_card(*row) for row in rows]

        logger.info(
            "Search served",
            extra={
                "search_type": search_type,
                "posts": len(results["posts"]),
                "communities": len(results["communities"]),
            },
        )
        return {"query": text, "type": search_type, "results": results}
