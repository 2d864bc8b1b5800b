"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory application and client, account factories, database
session fixtures and mocks
Dependencies: pytest, sqlalchemy, fastapi
System role: Test infrastructure and fixture management
"""

import uuid
from typing import Any, Callable
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from explorely.boundary.db.models import UserModel
from explorely.configs import Settings
from explorely.configs.auth import AuthSettings
from explorely.configs.database import DatabaseSettings
from explorely.main import create_app

DEFAULT_PASSWORD = "Passw0rdOK"


@pytest.fixture
def test_settings() -> Settings:
    """Settings for an isolated in-memory database with cheap hashing."""
    return Settings(
        database=DatabaseSettings(
            url="sqlite+aiosqlite:///:memory:",
            create_tables_on_startup=True,
        ),
        auth=AuthSettings(session_secret="test-secret", bcrypt_rounds=4),
    )


@pytest.fixture
def client(test_settings: Settings):
    """
    TestClient with the lifespan running.

    Yields:
        TestClient: Client bound to a fresh application and database
    """
    app = create_app(test_settings)
    with TestClient(app) as test_client:
        yield test_client


def run_db(client: TestClient, fn: Callable, *args: Any) -> Any:
    """Run fn(session, *args) on the app's event loop and commit."""

    async def _call():
        session_factory = client.app.state.context.session_factory
        async with session_factory() as session:
            result = await fn(session, *args)
            await session.commit()
            return result

    return client.portal.call(_call)


async def _promote(session: AsyncSession, user_id: uuid.UUID) -> None:
    await session.execute(update(UserModel).where(UserModel.id == user_id).values(is_admin=True))


async def _count(session: AsyncSession, model: type, *criteria: Any) -> int:
    stmt = select(func.count()).select_from(model)
    if criteria:
        stmt = stmt.where(*criteria)
    return (await session.execute(stmt)).scalar_one()


@pytest.fixture
def run_in_db(client: TestClient) -> Callable[..., Any]:
    """Run fn(session, *args) against the app's database and commit."""

    def _run_in_db(fn: Callable, *args: Any) -> Any:
        return run_db(client, fn, *args)

    return _run_in_db


@pytest.fixture
def count_rows(client: TestClient) -> Callable[..., int]:
    """Count rows of a model matching criteria."""

    def _count_rows(model: type, *criteria: Any) -> int:
        return run_db(client, _count, model, *criteria)

    return _count_rows


@pytest.fixture
def register(client: TestClient) -> Callable[..., dict]:
    """
    Factory that registers an account through the API.

    Returns:
        Callable: register(username, admin=False) -> {"id", "token", "headers"}
    """

    def _register(username: str, admin: bool = False) -> dict:
        response = client.post(
            "/auth/register",
            json={
                "email": f"{username}@example.com",
                "password": DEFAULT_PASSWORD,
                "name": username.capitalize(),
                "username": username,
            },
        )
        assert response.status_code == 201, response.json()
        # Requests authenticate by header; drop the login cookie
        client.cookies.clear()
        body = response.json()
        user_id = uuid.UUID(body["user"]["id"])
        if admin:
            run_db(client, _promote, user_id)
        return {
            "id": user_id,
            "token": body["token"],
            "headers": {"Authorization": f"Bearer {body['token']}"},
        }

    return _register


@pytest.fixture
def create_community(client: TestClient) -> Callable[..., dict]:
    """Factory that creates a community owned by the given account."""

    def _create(owner: dict, name: str = "Backpackers", **overrides: Any) -> dict:
        payload = {
            "name": name,
            "description": "Budget travel tips",
            "rules": [{"content": "Be kind"}],
            **overrides,
        }
        response = client.post("/api/communities", json=payload, headers=owner["headers"])
        assert response.status_code == 201, response.json()
        return response.json()

    return _create


@pytest.fixture
def create_post(client: TestClient) -> Callable[..., dict]:
    """Factory that posts into a community as the given account."""

    def _create(author: dict, community_id: str, title: str = "Hidden beaches") -> dict:
        response = client.post(
            "/api/posts",
            json={"title": title, "content": "Where to swim", "communityId": community_id},
            headers=author["headers"],
        )
        assert response.status_code == 201, response.json()
        return response.json()

    return _create


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    import explorely.boundary.db.models  # noqa: F401
    from explorely.boundary.db.base import Base

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def mock_session() -> AsyncSession:
    """Provide mock async database session."""
    return AsyncMock(spec=AsyncSession)
