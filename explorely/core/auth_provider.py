"""
Token-based authentication provider.

A login writes a server-side session row and hands back a signed JWT that
carries the session ID (`sid`) and user ID (`sub`). A token authenticates
only while its session row is live; every authenticated request pushes the
row's expiry forward, and logout deletes it.

Dependencies: PyJWT, sqlalchemy, explorely.boundary.db, explorely.configs
System role: The single authentication mechanism for /auth and /api routes
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol

import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from explorely.boundary.db.base import utc_now
from explorely.boundary.db.CRUD.auth_session_crud import auth_session_crud
from explorely.boundary.db.CRUD.user_crud import user_crud
from explorely.boundary.db.models.user_model import UserModel
from explorely.configs.auth import AuthSettings
from explorely.core.exceptions import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)

BANNED_MESSAGE = "Your account has been banned"


@dataclass
class IssuedToken:
    """Bearer token returned to the client after login."""

    token: str
    session_id: uuid.UUID
    expires_at: datetime


class AuthenticationProvider(Protocol):
    """Contract shared by every way of turning a request credential into a user."""

    async def login(
        self,
        db: AsyncSession,
        user: UserModel,
        user_agent: str | None = None,
        ip_address: str | None = None,
    ) -> IssuedToken:
        """Start a session for an already verified user."""
        ...

    async def authenticate(self, db: AsyncSession, token: str) -> UserModel:
        """Resolve a credential to its user or raise AuthenticationError."""
        ...

    async def logout(self, db: AsyncSession, token: str) -> bool:
        """End the session behind a credential."""
        ...


class TokenAuthenticationProvider:
    """JWT bearer tokens backed by rows in auth_sessions."""

    def __init__(self, settings: AuthSettings) -> None:
        """
        Initialize provider with signing and lifetime settings.

        Args:
            settings: Authentication settings
        """
        self.settings = settings
        self.session_max_age = timedelta(hours=settings.session_max_age_hours)
        self.token_max_age = timedelta(days=settings.token_max_age_days)

    def encode(self, user_id: uuid.UUID, session_id: uuid.UUID, issued_at: datetime) -> str:
        """Sign a token for a session."""
        payload = {
            "sub": str(user_id),
            "sid": str(session_id),
            "iat": issued_at,
            "exp": issued_at + self.token_max_age,
        }
        return jwt.encode(
            payload,
            self.settings.session_secret,
            algorithm=self.settings.jwt_algorithm,
        )

    def decode(self, token: str) -> tuple[uuid.UUID, uuid.UUID]:
        """
        Verify a token signature and expiry.

        Args:
            token: Encoded JWT

        Returns:
            (user_id, session_id)

        Raises:
            AuthenticationError: If the token is malformed, forged or expired
        """
        try:
            payload = jwt.decode(
                token,
                self.settings.session_secret,
                algorithms=[self.settings.jwt_algorithm],
            )
            return uuid.UUID(payload["sub"]), uuid.UUID(payload["sid"])
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("Token expired") from e
        except (jwt.InvalidTokenError, KeyError, ValueError) as e:
            logger.info("Rejected bearer token", extra={"error": str(e)})
            raise AuthenticationError("Invalid token") from e

    async def login(
        self,
        db: AsyncSession,
        user: UserModel,
        user_agent: str | None = None,
        ip_address: str | None = None,
    ) -> IssuedToken:
        """
        Start a session for a verified user.

        Args:
            db: Async database session
            user: Authenticated user
            user_agent: Client user agent, stored for auditing
            ip_address: Client address, stored for auditing

        Returns:
            IssuedToken: Signed token and session metadata

        Raises:
            AuthorizationError: If the user is banned
        """
        if user.is_banned:
            raise AuthorizationError(BANNED_MESSAGE, {"user_id": str(user.id)})

        now = utc_now()
        auth_session = await auth_session_crud.create(
            db,
            user_id=user.id,
            expires_at=now + self.session_max_age,
            last_activity_at=now,
            user_agent=(user_agent or "")[:500] or None,
            ip_address=ip_address,
        )
        logger.info(
            "Session started",
            extra={"user_id": str(user.id), "session_id": str(auth_session.id)},
        )
        return IssuedToken(
            token=self.encode(user.id, auth_session.id, now),
            session_id=auth_session.id,
            expires_at=auth_session.expires_at,
        )

    async def authenticate(self, db: AsyncSession, token: str) -> UserModel:
        """
        Resolve a bearer token to its user and refresh the session.

        Args:
            db: Async database session
            token: Encoded JWT

        Returns:
            UserModel: The authenticated user

        Raises:
            AuthenticationError: If the token or its session is invalid
            AuthorizationError: If the user is banned
        """
        user_id, session_id = self.decode(token)
        now = utc_now()

        auth_session = await auth_session_crud.get_active(db, session_id, now)
        if auth_session is None or auth_session.user_id != user_id:
            raise AuthenticationError("Session expired or revoked")

        user = await user_crud.get_by_id(db, user_id)
        if user is None:
            raise AuthenticationError("User not found")
        if user.is_banned:
            raise AuthorizationError(BANNED_MESSAGE, {"user_id": str(user.id)})

        auth_session.last_activity_at = now
        auth_session.expires_at = now + self.session_max_age
        await db.flush()
        return user

    async def logout(self, db: AsyncSession, token: str) -> bool:
        """
        Delete the session behind a token.

        Args:
            db: Async database session
            token: Encoded JWT

        Returns:
            bool: True if a session row was removed
        """
        _, session_id = self.decode(token)
        removed = await auth_session_crud.delete_by_id(db, session_id)
        logger.info("Session ended", extra={"session_id": str(session_id), "removed": removed})
        return removed
