"""
Test suite for the database maintenance commands.

Seeds stale and fresh notifications and auth sessions in SQLite, then
runs the retention purge.

System role: Verification of retention cleanup
"""

from datetime import timedelta

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from explorely.boundary.db.base import utc_now
from explorely.boundary.db.CRUD.auth_session_crud import auth_session_crud
from explorely.boundary.db.maintenance import purge, run
from explorely.boundary.db.models import (
    AuthSessionModel,
    CommunityModel,
    NotificationModel,
    NotificationType,
    PostModel,
    UserModel,
)
from explorely.configs import Settings
from explorely.core.context import AppContext


async def _count(session: AsyncSession, model: type) -> int:
    return (await session.execute(select(func.count()).select_from(model))).scalar_one()


async def _seed_users(session: AsyncSession) -> tuple[UserModel, UserModel, PostModel]:
    owner = UserModel(email="owner@example.com", username="owner_one", name="Owner", password_hash="x")
    guest = UserModel(email="guest@example.com", username="guest_one", name="Guest", password_hash="x")
    session.add_all([owner, guest])
    await session.flush()
    community = CommunityModel(name="Hikers", description="Trails", creator_id=owner.id)
    session.add(community)
    await session.flush()
    post = PostModel(title="Trail", content="Map", author_id=owner.id, community_id=community.id)
    session.add(post)
    await session.flush()
    return owner, guest, post


def _auth_session(user: UserModel, expires_in: timedelta) -> AuthSessionModel:
    now = utc_now()
    return AuthSessionModel(user_id=user.id, expires_at=now + expires_in, last_activity_at=now)


@pytest.fixture
async def context(test_settings: Settings):
    """
    Application context over a fresh in-memory database.

    Yields:
        AppContext: Context with tables created
    """
    context = AppContext.build(test_settings)
    await context.create_tables()
    yield context
    await context.close()


class TestRetentionPurge:
    """Test suite for the purge command."""

    @pytest.mark.asyncio
    async def test_purge_removes_stale_rows_and_keeps_fresh_ones(
        self, context: AppContext
    ) -> None:
        """Test old notifications and expired sessions go; current ones stay."""
        # Arrange
        retention = timedelta(days=context.settings.notifications.retention_days)
        async with context.session_factory() as session:
            async with session.begin():
                owner, guest, post = await _seed_users(session)
                session.add_all(
                    [
                        NotificationModel(
                            recipient_id=owner.id,
                            sender_id=guest.id,
                            type=NotificationType.POST_LIKE,
                            post_id=post.id,
                            created_at=utc_now() - retention - timedelta(days=30),
                        ),
                        NotificationModel(
                            recipient_id=owner.id,
                            sender_id=guest.id,
                            type=NotificationType.POST_LIKE,
                            post_id=post.id,
                        ),
                        _auth_session(owner, timedelta(hours=-1)),
                        _auth_session(guest, timedelta(days=7)),
                    ]
                )
                guest_id = guest.id

        # Act
        removed = await purge(context)

        # Assert
        assert removed == {"notifications": 1, "auth_sessions": 1}
        async with context.session_factory() as session:
            assert await _count(session, NotificationModel) == 1
            assert await _count(session, AuthSessionModel) == 1
            remaining = (await session.execute(select(AuthSessionModel.user_id))).scalar_one()
            assert remaining == guest_id

    @pytest.mark.asyncio
    async def test_purge_on_empty_database(self, context: AppContext) -> None:
        assert await purge(context) == {"notifications": 0, "auth_sessions": 0}

    @pytest.mark.asyncio
    async def test_unknown_command_is_rejected(self, test_settings: Settings) -> None:
        with pytest.raises(ValueError, match="Unknown command"):
            await run("vacuum", test_settings)


class TestAuthSessionPurge:
    """Test suite for AuthSessionCRUD.purge_expired."""

    @pytest.mark.asyncio
    async def test_purge_expired_uses_inclusive_cutoff(self, test_async_db: AsyncSession) -> None:
        # Arrange
        owner, guest, _ = await _seed_users(test_async_db)
        now = utc_now()
        test_async_db.add_all(
            [
                AuthSessionModel(user_id=owner.id, expires_at=now, last_activity_at=now),
                _auth_session(owner, timedelta(minutes=-5)),
                _auth_session(guest, timedelta(minutes=5)),
            ]
        )
        await test_async_db.flush()

        # Act
        removed = await auth_session_crud.purge_expired(test_async_db, now)

        # Assert
        assert removed == 2
        assert await _count(test_async_db, AuthSessionModel) == 1
