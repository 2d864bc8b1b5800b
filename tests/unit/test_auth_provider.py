"""
Test suite for TokenAuthenticationProvider.

Token encoding runs for real; session and user lookups are mocked.

System role: Verification of bearer token and session checks
"""

import uuid
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from explorely.boundary.db.base import utc_now
from explorely.configs.auth import AuthSettings
from explorely.core.auth_provider import BANNED_MESSAGE, TokenAuthenticationProvider
from explorely.core.exceptions import AuthenticationError, AuthorizationError

CRUD_PATH = "explorely.core.auth_provider"


@pytest.fixture
def provider() -> TokenAuthenticationProvider:
    """Provide provider with a test secret."""
    return TokenAuthenticationProvider(AuthSettings(session_secret="unit-secret"))


@pytest.fixture
def mock_db_session() -> AsyncSession:
    """Provide mock async database session."""
    return AsyncMock(spec=AsyncSession)


def _user(banned: bool = False) -> MagicMock:
    user = MagicMock()
    user.id = uuid.uuid4()
    user.is_banned = banned
    return user


class TestTokenEncoding:
    """Test suite for encode/decode."""

    def test_decode_returns_user_and_session(self, provider) -> None:
        """Test a freshly signed token decodes to its IDs."""
        # Arrange
        user_id, session_id = uuid.uuid4(), uuid.uuid4()
        token = provider.encode(user_id, session_id, utc_now())

        # Act
        decoded = provider.decode(token)

        # Assert
        assert decoded == (user_id, session_id)

    def test_token_signed_with_other_secret_is_rejected(self, provider) -> None:
        """Test a forged signature raises AuthenticationError."""
        # Arrange
        other = TokenAuthenticationProvider(AuthSettings(session_secret="someone-else"))
        token = other.encode(uuid.uuid4(), uuid.uuid4(), utc_now())

        # Act & Assert
        with pytest.raises(AuthenticationError, match="Invalid token"):
            provider.decode(token)

    def test_expired_token_is_rejected(self, provider) -> None:
        """Test a token past its absolute lifetime raises AuthenticationError."""
        # Arrange
        issued = utc_now() - provider.token_max_age - timedelta(minutes=1)
        token = provider.encode(uuid.uuid4(), uuid.uuid4(), issued)

        # Act & Assert
        with pytest.raises(AuthenticationError, match="Token expired"):
            provider.decode(token)

    def test_garbage_is_rejected(self, provider) -> None:
        with pytest.raises(AuthenticationError):
            provider.decode("not-a-jwt")


class TestSessions:
    """Test suite for login and authenticate."""

    @pytest.mark.asyncio
    async def test_login_refuses_banned_user(self, provider, mock_db_session) -> None:
        """Test a banned user never gets a session."""
        # Arrange
        with patch(f"{CRUD_PATH}.auth_session_crud") as mock_sessions:
            mock_sessions.create = AsyncMock()

            # Act & Assert
            with pytest.raises(AuthorizationError, match=BANNED_MESSAGE):
                await provider.login(mock_db_session, _user(banned=True))
            mock_sessions.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_login_issues_token_for_session(self, provider, mock_db_session) -> None:
        """Test login stores a session and signs its ID into the token."""
        # Arrange
        user = _user()
        stored = MagicMock(id=uuid.uuid4(), expires_at=utc_now() + timedelta(hours=24))
        with patch(f"{CRUD_PATH}.auth_session_crud") as mock_sessions:
            mock_sessions.create = AsyncMock(return_value=stored)

            # Act
            issued = await provider.login(mock_db_session, user, user_agent="pytest")

        # Assert
        assert issued.session_id == stored.id
        assert provider.decode(issued.token) == (user.id, stored.id)
        assert mock_sessions.create.call_args.kwargs["user_agent"] == "pytest"

    @pytest.mark.asyncio
    async def test_revoked_session_is_rejected(self, provider, mock_db_session) -> None:
        """Test a valid signature without a live session is refused."""
        # Arrange
        token = provider.encode(uuid.uuid4(), uuid.uuid4(), utc_now())
        with patch(f"{CRUD_PATH}.auth_session_crud") as mock_sessions:
            mock_sessions.get_active = AsyncMock(return_value=None)

            # Act & Assert
            with pytest.raises(AuthenticationError, match="Session expired or revoked"):
                await provider.authenticate(mock_db_session, token)

    @pytest.mark.asyncio
    async def test_authenticate_slides_session_expiry(self, provider, mock_db_session) -> None:
        """Test every authenticated request pushes the session expiry forward."""
        # Arrange
        user = _user()
        session_id = uuid.uuid4()
        stored = MagicMock(user_id=user.id, expires_at=utc_now())
        token = provider.encode(user.id, session_id, utc_now())
        with patch(f"{CRUD_PATH}.auth_session_crud") as mock_sessions, patch(
            f"{CRUD_PATH}.user_crud"
        ) as mock_users:
            mock_sessions.get_active = AsyncMock(return_value=stored)
            mock_users.get_by_id = AsyncMock(return_value=user)

            # Act
            result = await provider.authenticate(mock_db_session, token)

        # Assert
        assert result is user
        assert stored.expires_at > utc_now() + timedelta(hours=23)
        mock_db_session.flush.assert_awaited_once()
