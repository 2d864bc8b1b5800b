"""
User profile service.

Dependencies: sqlalchemy, explorely.boundary.db.CRUD
System role: Profile use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from explorely.application.services.serializers import community_summary
from explorely.boundary.db.CRUD.user_crud import user_crud
from explorely.boundary.db.models.user_model import UserModel
from explorely.core.exceptions import ConflictError, NotFoundError, ValidationError
from explorely.core.passwords import is_valid_username

logger = logging.getLogger(__name__)


class UserService:
    """Profile reads and edits."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize user service.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _profile(self, user: UserModel, include_private: bool) -> dict:
        joined = await user_crud.joined_communities(self.db, user.id)
        data = {
            "id": user.id,
            "username": user.username,
            "name": user.name,
            "avatar": user.avatar,
            "bio": user.bio,
            "karma": {
                "total": user.karma_total,
                "post": user.karma_post,
                "comment": user.karma_comment,
                "last_calculated": user.karma_calculated_at,
            },
            "joined_communities": [community_summary(c) for c in joined],
            "created_at": user.created_at,
        }
        if include_private:
            data.update(
                email=user.email,
                is_admin=user.is_admin,
                is_banned=user.is_banned,
            )
        return data

    async def get_own_profile(self, user: UserModel) -> dict:
        """Profile of the caller, including email and flags."""
        return await self._profile(user, include_private=True)

    async def get_public_profile(self, user_id: UUID) -> dict:
        """
        Profile visible to everyone.

        Raises:
            NotFoundError: If the user does not exist
        """
        user = await user_crud.get_by_id(self.db, user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return await self._profile(user, include_private=False)

    async def update_profile(
        self,
        user: UserModel,
        name: str | None = None,
        username: str | None = None,
        bio: str | None = None,
        avatar: str | None = None,
    ) -> dict:
        """
        Edit the caller's profile.

        Args:
            user: Authenticated caller
            name: New display name
            username: New handle, must stay unique
            bio: New bio
            avatar: New avatar URL

        Returns:
            dict: Updated own profile

        Raises:
            ValidationError: If nothing to change or username malformed
            ConflictError: If the username is taken
        """
        changes: dict = {}
        if name is not None:
            if not name.strip():
                raise ValidationError("Name cannot be empty", field="name")
            changes["name"] = name.strip()
        if username is not None and username != user.username:
            username = username.strip()
            if not is_valid_username(username):
                raise ValidationError("Invalid username", field="username")
            if await user_crud.username_taken(self.db, username, exclude_id=user.id):
                raise ConflictError("Username already taken", field="username")
            changes["username"] = username
        if bio is not None:
            changes["bio"] = bio
        if avatar is not None:
            changes["avatar"] = avatar

        if changes:
            user = await user_crud.update_by_id(self.db, user.id, **changes)
            logger.info(
                "Profile updated",
                extra={"user_id": str(user.id), "fields": sorted(changes)},
            )
        return await self._profile(user, include_private=True)
