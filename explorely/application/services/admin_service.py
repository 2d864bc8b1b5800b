"""
Admin service.

Moderation console: platform stats, per-entity listings with the
reported filter, bans and cascading deletes. Report workflow lives in
ReportService.

Dependencies: sqlalchemy, explorely.boundary.db.CRUD, explorely.core
System role: Admin use case orchestration
"""

import logging
from datetime import timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from explorely.application.services.pagination import page_meta, page_offset
from explorely.application.services.serializers import (
    community_summary,
    post_dict,
    review_dict,
)
from explorely.boundary.db.base import utc_now
from explorely.boundary.db.CRUD.auth_session_crud import auth_session_crud
from explorely.boundary.db.CRUD.comment_crud import comment_crud
from explorely.boundary.db.CRUD.community_crud import community_crud
from explorely.boundary.db.CRUD.post_crud import post_crud
from explorely.boundary.db.CRUD.report_crud import report_crud
from explorely.boundary.db.CRUD.review_crud import review_crud
from explorely.boundary.db.CRUD.user_crud import user_crud
from explorely.boundary.db.models import (
    CommentModel,
    CommunityModel,
    PostModel,
    ReportModel,
    ReviewModel,
    UserModel,
)
from explorely.boundary.db.models.report_model import ReportStatus, ReportedType
from explorely.core.deletion_policy import delete_entities
from explorely.core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

FILTERS = ("all", "reported")
ACTIVITY_WINDOW_DAYS = 30
TOP_COMMUNITIES_LIMIT = 5


def _reported_only(filter: str) -> bool:
    if filter not in FILTERS:
        raise ValidationError(f"Invalid filter: {filter}", field="filter")
    return filter == "reported"


def _search(search: str | None) -> str | None:
    if not search:
        return None
    return search.strip() or None


class AdminService:
    """Admin console orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize admin service.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _totals(self, since=None) -> dict:
        counters = {
            "users": (user_crud, UserModel),
            "communities": (community_crud, CommunityModel),
            "posts": (post_crud, PostModel),
            "comments": (comment_crud, CommentModel),
            "reviews": (review_crud, ReviewModel),
            "reports": (report_crud, ReportModel),
        }
        totals = {}
        for name, (crud, model) in counters.items():
            criteria = [model.created_at >= since] if since is not None else []
            totals[name] = await crud.count(self.db, *criteria)
        return totals

    async def stats(self) -> dict:
        """
        Platform overview.

        Returns:
            dict: totals, last_30_days, banned_users, pending_reports,
                top_communities
        """
        since = utc_now() - timedelta(days=ACTIVITY_WINDOW_DAYS)
        top = await community_crud.top_communities(self.db, limit=TOP_COMMUNITIES_LIMIT)
        return {
            "totals": await self._totals(),
            "last_30_days": await self._totals(since),
            "banned_users": await user_crud.count(self.db, UserModel.is_banned.is_(True)),
            "pending_reports": await report_crud.count(
                self.db, ReportModel.status == ReportStatus.PENDING
            ),
            "top_communities": [community_summary(c) for c, _, _ in top],
        }

    async def _reasons(self, reported_type: ReportedType, ids: list[UUID]) -> dict:
        return await report_crud.open_reasons_for_items(self.db, reported_type, ids)

    async def list_users(
        self,
        page: int,
        limit: int,
        filter: str = "all",
        search: str | None = None,
        banned: bool | None = None,
    ) -> dict:
        """
        Admin listing of users.

        Args:
            page: 1-based page number
            limit: Page size
            filter: "all" or "reported"
            search: Substring of username, email or name
            banned: Restrict to banned (True) or active (False) users

        Returns:
            dict: items plus pagination fields
        """
        users, total = await user_crud.list_filtered(
            self.db,
            limit,
            page_offset(page, limit),
            search=_search(search),
            reported_only=_reported_only(filter),
            banned=banned,
        )
        reasons = await self._reasons(ReportedType.USER, [u.id for u in users])
        items = [
            {
                "id": u.id,
                "email": u.email,
                "username": u.username,
                "name": u.name,
                "avatar": u.avatar,
                "is_admin": u.is_admin,
                "is_banned": u.is_banned,
                "karma_total": u.karma_total,
                "created_at": u.created_at,
                "report_count": u.report_count,
                "reports": reasons.get(u.id, []),
            }
            for u in users
        ]
        return {"items": items, **page_meta(total, page, limit, len(users))}

    async def set_banned(self, admin: UserModel, user_id: UUID, banned: bool) -> dict:
        """
        Ban or unban a user. Banning also ends the user's sessions.

        Raises:
            NotFoundError: If the user does not exist
            ValidationError: If an admin tries to ban themselves
        """
        if banned and user_id == admin.id:
            raise ValidationError("You cannot ban yourself")
        user = await user_crud.update_by_id(self.db, user_id, is_banned=banned)
        if user is None:
            raise NotFoundError("User", user_id)
        if banned:
            await auth_session_crud.delete_for_user(self.db, user_id)

        logger.info(
            "User ban state changed",
            extra={"user_id": str(user_id), "banned": banned, "admin_id": str(admin.id)},
        )
        action = "banned" if banned else "unbanned"
        return {"message": f"User {action} successfully"}

    async def delete_user(self, admin: UserModel, user_id: UUID) -> dict:
        """
        Delete a user and everything they own.

        Raises:
            NotFoundError: If the user does not exist
            ValidationError: If an admin tries to delete themselves
        """
        if user_id == admin.id:
            raise ValidationError("You cannot delete your own account from the admin console")
        if not await user_crud.exists(self.db, user_id):
            raise NotFoundError("User", user_id)
        removed = await delete_entities(self.db, "user", [user_id])
        return {"message": "User deleted successfully", "removed": removed}

    async def list_communities(
        self,
        page: int,
        limit: int,
        filter: str = "all",
        search: str | None = None,
    ) -> dict:
        """Admin listing of communities with member and post counts."""
        rows, total = await community_crud.list_with_counts(
            self.db,
            limit,
            page_offset(page, limit),
            search=_search(search),
            reported_only=_reported_only(filter),
        )
        reasons = await self._reasons(ReportedType.COMMUNITY, [c.id for c, _, _ in rows])
        items = [
            {
                "id": c.id,
                "name": c.name,
                "description": c.description,
                "avatar": c.avatar,
                "creator_id": c.creator_id,
                "is_private": c.is_private,
                "member_count": members,
                "post_count": posts,
                "created_at": c.created_at,
                "report_count": c.report_count,
                "reports": reasons.get(c.id, []),
            }
            for c, members, posts in rows
        ]
        return {"items": items, **page_meta(total, page, limit, len(rows))}

    async def list_posts(
        self,
        page: int,
        limit: int,
        filter: str = "all",
        search: str | None = None,
    ) -> dict:
        """Admin listing of posts."""
        posts, total = await post_crud.list_filtered(
            self.db,
            limit,
            page_offset(page, limit),
            search=_search(search),
            reported_only=_reported_only(filter),
        )
        reasons = await self._reasons(ReportedType.POST, [p.id for p in posts])
        items = [
            {**post_dict(p), "report_count": p.report_count, "reports": reasons.get(p.id, [])}
            for p in posts
        ]
        return {"items": items, **page_meta(total, page, limit, len(posts))}

    async def list_reviews(
        self,
        page: int,
        limit: int,
        filter: str = "all",
        search: str | None = None,
    ) -> dict:
        """Admin listing of reviews."""
        reviews, total = await review_crud.list_reviews(
            self.db,
            limit,
            page_offset(page, limit),
            search=_search(search),
            reported_only=_reported_only(filter),
        )
        reasons = await self._reasons(ReportedType.REVIEW, [r.id for r in reviews])
        items = [
            {**review_dict(r), "report_count": r.report_count, "reports": reasons.get(r.id, [])}
            for r in reviews
        ]
        return {"items": items, **page_meta(total, page, limit, len(reviews))}

    async def delete_entity(self, kind: str, entity_id: UUID) -> dict:
        """
        Delete a community, post or review through the deletion policy.

        Args:
            kind: "community", "post" or "review"
            entity_id: Entity to delete

        Raises:
            NotFoundError: If the entity does not exist
        """
        cruds = {"community": community_crud, "post": post_crud, "review": review_crud}
        if not await cruds[kind].exists(self.db, entity_id):
            raise NotFoundError(kind.capitalize(), entity_id)
        removed = await delete_entities(self.db, kind, [entity_id])
        return {"message": f"{kind.capitalize()} deleted successfully", "removed": removed}
