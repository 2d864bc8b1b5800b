"""
Test suite for BaseCRUD against a real SQLite database.

Tests create, read (by ID and all), update, delete, exists, count,
atomic increments and pagination.

System role: Verification of generic database layer foundation
"""

import uuid

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from explorely.boundary.db.CRUD.base_crud import BaseCRUD
from explorely.boundary.db.models import UserModel


@pytest.fixture
def user_crud() -> BaseCRUD:
    """Provide BaseCRUD bound to UserModel."""
    return BaseCRUD(UserModel)


async def _make_user(crud: BaseCRUD, session: AsyncSession, username: str) -> UserModel:
    return await crud.create(
        session,
        email=f"{username}@example.com",
        username=username,
        name=username.title(),
        password_hash="x",
    )


class TestBaseCRUDCreateRead:
    """Test suite for create and read."""

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_defaults(
        self, user_crud: BaseCRUD, test_async_db: AsyncSession
    ) -> None:
        """Test create flushes and refreshes server-side defaults."""
        # Act
        user = await _make_user(user_crud, test_async_db, "traveler1")

        # Assert
        assert isinstance(user.id, uuid.UUID)
        assert user.created_at is not None
        assert user.is_banned is False
        assert user.karma_total == 0

    @pytest.mark.asyncio
    async def test_get_by_id_and_exists(
        self, user_crud: BaseCRUD, test_async_db: AsyncSession
    ) -> None:
        # Arrange
        user = await _make_user(user_crud, test_async_db, "traveler1")
        missing = uuid.uuid4()

        # Act & Assert
        assert (await user_crud.get_by_id(test_async_db, user.id)).username == "traveler1"
        assert await user_crud.get_by_id(test_async_db, missing) is None
        assert await user_crud.exists(test_async_db, user.id) is True
        assert await user_crud.exists(test_async_db, missing) is False

    @pytest.mark.asyncio
    async def test_get_all_with_limit(
        self, user_crud: BaseCRUD, test_async_db: AsyncSession
    ) -> None:
        for name in ("traveler1", "traveler2", "traveler3"):
            await _make_user(user_crud, test_async_db, name)

        assert len(await user_crud.get_all(test_async_db)) == 3
        assert len(await user_crud.get_all(test_async_db, limit=2)) == 2


class TestBaseCRUDWrite:
    """Test suite for update, delete, count and increment."""

    @pytest.mark.asyncio
    async def test_update_by_id(self, user_crud: BaseCRUD, test_async_db: AsyncSession) -> None:
        # Arrange
        user = await _make_user(user_crud, test_async_db, "traveler1")

        # Act
        updated = await user_crud.update_by_id(test_async_db, user.id, bio="Hello")
        missing = await user_crud.update_by_id(test_async_db, uuid.uuid4(), bio="x")

        # Assert
        assert updated.bio == "Hello"
        assert missing is None

    @pytest.mark.asyncio
    async def test_delete_by_id(self, user_crud: BaseCRUD, test_async_db: AsyncSession) -> None:
        user = await _make_user(user_crud, test_async_db, "traveler1")

        assert await user_crud.delete_by_id(test_async_db, user.id) is True
        assert await user_crud.delete_by_id(test_async_db, user.id) is False

    @pytest.mark.asyncio
    async def test_count_with_criteria(
        self, user_crud: BaseCRUD, test_async_db: AsyncSession
    ) -> None:
        await _make_user(user_crud, test_async_db, "traveler1")
        banned = await _make_user(user_crud, test_async_db, "traveler2")
        await user_crud.update_by_id(test_async_db, banned.id, is_banned=True)

        assert await user_crud.count(test_async_db) == 2
        assert await user_crud.count(test_async_db, UserModel.is_banned.is_(True)) == 1

    @pytest.mark.asyncio
    async def test_increment_is_applied_in_sql(
        self, user_crud: BaseCRUD, test_async_db: AsyncSession
    ) -> None:
        """Test increment adds to the stored value, including negative deltas."""
        # Arrange
        user = await _make_user(user_crud, test_async_db, "traveler1")

        # Act
        await user_crud.increment(test_async_db, user.id, "report_count", 3)
        await user_crud.increment(test_async_db, user.id, "report_count", -1)

        # Assert
        stored = await test_async_db.scalar(
            select(UserModel.report_count).where(UserModel.id == user.id)
        )
        assert stored == 2

    @pytest.mark.asyncio
    async def test_paginate_returns_page_and_total(
        self, user_crud: BaseCRUD, test_async_db: AsyncSession
    ) -> None:
        for i in range(5):
            await _make_user(user_crud, test_async_db, f"traveler{i}")
        stmt = select(UserModel).order_by(UserModel.username)

        items, total = await user_crud.paginate(test_async_db, stmt, limit=2, offset=2)

        assert total == 5
        assert [u.username for u in items] == ["traveler2", "traveler3"]
