"""
Community service.

Creation, membership, moderation (blocking) and ranking of communities.

Dependencies: sqlalchemy, explorely.boundary.db.CRUD, explorely.core
System role: Community use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from explorely.boundary.db.CRUD.community_crud import community_crud
from explorely.boundary.db.CRUD.user_crud import user_crud
from explorely.boundary.db.models.community_model import CommunityModel, CommunityRuleModel
from explorely.boundary.db.models.user_model import UserModel
from explorely.core.deletion_policy import delete_entities
from explorely.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _rules(contents: list[str]) -> list[CommunityRuleModel]:
    return [
        CommunityRuleModel(position=index, content=content.strip())
        for index, content in enumerate(contents, start=1)
    ]


class CommunityService:
    """Community orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize community service.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _get(self, community_id: UUID) -> CommunityModel:
        community = await community_crud.get_by_id(self.db, community_id)
        if community is None:
            raise NotFoundError("Community", community_id)
        return community

    async def _to_dict(
        self,
        community: CommunityModel,
        viewer: UserModel | None,
        member_count: int | None = None,
        post_count: int | None = None,
    ) -> dict:
        if member_count is None:
            member_count = await community_crud.member_count(self.db, community.id)
        if post_count is None:
            post_count = await community_crud.post_count(self.db, community.id)
        is_member = is_moderator = False
        if viewer is not None:
            is_member = await community_crud.is_member(self.db, community.id, viewer.id)
            is_moderator = await community_crud.is_moderator(self.db, community.id, viewer.id)
        return {
            "id": community.id,
            "name": community.name,
            "description": community.description,
            "avatar": community.avatar,
            "banner": community.banner,
            "creator_id": community.creator_id,
            "is_private": community.is_private,
            "rules": [{"order": r.position, "content": r.content} for r in community.rules],
            "member_count": member_count,
            "post_count": post_count,
            "is_member": is_member,
            "is_moderator": is_moderator,
            "is_creator": viewer is not None and viewer.id == community.creator_id,
            "created_at": community.created_at,
        }

    async def _membership(self, community_id: UUID, action: str, is_member: bool) -> dict:
        return {
            "message": f"Successfully {action} the community",
            "action": action,
            "is_member": is_member,
            "member_count": await community_crud.member_count(self.db, community_id),
        }

    async def create_community(
        self,
        creator: UserModel,
        name: str,
        description: str,
        rules: list[str],
        avatar: str | None = None,
        banner: str | None = None,
        is_private: bool = False,
    ) -> dict:
        """
        Create a community; the creator becomes its first member and moderator.

        Args:
            creator: Authenticated caller
            name: Unique community name
            description: About text
            rules: Rule texts in display order (at least one)
            avatar: Avatar URL
            banner: Banner URL
            is_private: Hide from the public feed

        Returns:
            dict: Created community

        Raises:
            ValidationError: If no rules were given
            ConflictError: If the name is taken
        """
        name = name.strip()
        if not rules:
            raise ValidationError("At least one rule is required", field="rules")
        if await community_crud.get_by_name(self.db, name) is not None:
            raise ConflictError("Community name already exists", field="name")

        community = await community_crud.create(
            self.db,
            name=name,
            description=description.strip(),
            avatar=avatar,
            banner=banner,
            is_private=is_private,
            creator_id=creator.id,
            rules=_rules(rules),
        )
        await community_crud.add_member(self.db, community.id, creator.id)
        await community_crud.add_moderator(self.db, community.id, creator.id)

        logger.info(
            "Community created",
            extra={"community_id": str(community.id), "creator_id": str(creator.id)},
        )
        return await self._to_dict(community, creator, member_count=1, post_count=0)

    async def list_communities(
        self,
        viewer: UserModel | None,
        limit: int = 50,
        offset: int = 0,
        search: str | None = None,
    ) -> list[dict]:
        """All communities with counts, newest first."""
        rows, _ = await community_crud.list_with_counts(self.db, limit, offset, search=search)
        return [await self._to_dict(c, viewer, m, p) for c, m, p in rows]

    async def top_communities(self, viewer: UserModel | None, limit: int = 3) -> list[dict]:
        """Communities ranked by members + 2 * posts."""
        rows = await community_crud.top_communities(self.db, limit)
        return [await self._to_dict(c, viewer, m, p) for c, m, p in rows]

    async def get_community(self, community_id: UUID, viewer: UserModel | None) -> dict:
        """
        Community detail.

        Raises:
            NotFoundError: If the community does not exist
            AuthorizationError: If the viewer is blocked from it
        """
        community = await self._get(community_id)
        if viewer is not None and await community_crud.is_blocked(self.db, community.id, viewer.id):
            raise AuthorizationError("You have been blocked from this community")
        return await self._to_dict(community, viewer)

    async def joined_communities(self, user: UserModel) -> list[dict]:
        """Communities the caller belongs to."""
        communities = await user_crud.joined_communities(self.db, user.id)
        return [await self._to_dict(c, user) for c in communities]

    async def join(self, community_id: UUID, user: UserModel) -> dict:
        """
        Join a community.

        Raises:
            AuthorizationError: If the caller is blocked
            ConflictError: If already a member
        """
        await self._get(community_id)
        if await community_crud.is_blocked(self.db, community_id, user.id):
            raise AuthorizationError("You have been blocked from this community")
        if not await community_crud.add_member(self.db, community_id, user.id):
            raise ConflictError("You are already a member of this community")
        logger.info("Community joined", extra={"community_id": str(community_id), "user_id": str(user.id)})
        return await self._membership(community_id, "joined", True)

    async def leave(self, community_id: UUID, user: UserModel) -> dict:
        """
        Leave a community.

        Raises:
            ValidationError: If the caller created the community
            ConflictError: If not a member
        """
        community = await self._get(community_id)
        if community.creator_id == user.id:
            raise ValidationError("The community creator cannot leave the community")
        if not await community_crud.remove_member(self.db, community_id, user.id):
            raise ConflictError("You are not a member of this community")
        await community_crud.remove_moderator(self.db, community_id, user.id)
        logger.info("Community left", extra={"community_id": str(community_id), "user_id": str(user.id)})
        return await self._membership(community_id, "left", False)

    async def toggle_membership(self, community_id: UUID, user: UserModel) -> dict:
        """Join if not a member, leave otherwise."""
        if await community_crud.is_member(self.db, community_id, user.id):
            return await self.leave(community_id, user)
        return await self.join(community_id, user)

    async def update_community(
        self,
        community_id: UUID,
        user: UserModel,
        description: str | None = None,
        rules: list[str] | None = None,
        avatar: str | None = None,
        banner: str | None = None,
        is_private: bool | None = None,
    ) -> dict:
        """
        Edit a community (creator only).

        Raises:
            AuthorizationError: If the caller is not the creator
        """
        community = await self._get(community_id)
        if community.creator_id != user.id:
            raise AuthorizationError("Only the community creator can update it")

        if description is not None:
            community.description = description.strip()
        if avatar is not None:
            community.avatar = avatar
        if banner is not None:
            community.banner = banner
        if is_private is not None:
            community.is_private = is_private
        if rules is not None:
            if not rules:
                raise ValidationError("At least one rule is required", field="rules")
            community.rules = _rules(rules)
        await self.db.flush()
        await self.db.refresh(community)

        logger.info("Community updated", extra={"community_id": str(community_id)})
        return await self._to_dict(community, user)

    async def _require_moderator(self, community: CommunityModel, user: UserModel) -> None:
        if community.creator_id == user.id:
            return
        if not await community_crud.is_moderator(self.db, community.id, user.id):
            raise AuthorizationError("Only the community owner or moderators can do this")

    async def block_member(self, community_id: UUID, target_id: UUID, user: UserModel) -> dict:
        """
        Block a user from a community and drop their membership.

        Raises:
            AuthorizationError: If the caller is not creator/moderator
            ValidationError: If the target is the creator or the caller
        """
        community = await self._get(community_id)
        await self._require_moderator(community, user)
        if target_id in (community.creator_id, user.id):
            raise ValidationError("This user cannot be blocked")
        if await user_crud.get_by_id(self.db, target_id) is None:
            raise NotFoundError("User", target_id)

        await community_crud.block(self.db, community_id, target_id)
        await community_crud.remove_member(self.db, community_id, target_id)
        await community_crud.remove_moderator(self.db, community_id, target_id)
        logger.info(
            "Community member blocked",
            extra={"community_id": str(community_id), "target_id": str(target_id)},
        )
        return {"message": "User blocked successfully"}

    async def unblock_member(self, community_id: UUID, target_id: UUID, user: UserModel) -> dict:
        """Lift a block (creator or moderator)."""
        community = await self._get(community_id)
        await self._require_moderator(community, user)
        if not await community_crud.unblock(self.db, community_id, target_id):
            raise NotFoundError("Blocked member", target_id)
        logger.info(
            "Community member unblocked",
            extra={"community_id": str(community_id), "target_id": str(target_id)},
        )
        return {"message": "User unblocked successfully"}

    async def delete_community(self, community_id: UUID, user: UserModel) -> dict:
        """
        Delete a community with its posts, comments and itineraries.

        Raises:
            AuthorizationError: If the caller is neither creator nor admin
        """
        community = await self._get(community_id)
        if community.creator_id != user.id and not user.is_admin:
            raise AuthorizationError("Only the community creator can delete it")
        removed = await delete_entities(self.db, "community", [community_id])
        return {"message": "Community deleted successfully", "removed": removed}
