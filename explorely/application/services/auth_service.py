"""
Authentication service.

Registration, credential checks, login/logout through the authentication
provider, and username/email availability checks.

Dependencies: sqlalchemy, explorely.core, explorely.boundary.db.CRUD
System role: Account access use case orchestration
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from explorely.application.services.serializers import auth_user
from explorely.boundary.db.CRUD.user_crud import user_crud
from explorely.configs.auth import AuthSettings
from explorely.core.auth_provider import AuthenticationProvider
from explorely.core.exceptions import (
    AuthenticationError,
    ConflictError,
    ValidationError,
)
from explorely.core.passwords import (
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
    hash_password,
    is_strong_password,
    is_valid_email,
    is_valid_username,
    verify_password,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    """Account access orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        provider: AuthenticationProvider,
        settings: AuthSettings,
    ) -> None:
        """
        Initialize auth service.

        Args:
            db: Async SQLAlchemy session
            provider: Authentication provider that issues tokens
            settings: Authentication settings (bcrypt cost)
        """
        self.db = db
        self.provider = provider
        self.settings = settings

    async def register(
        self,
        email: str,
        password: str,
        name: str,
        username: str,
        user_agent: str | None = None,
        ip_address: str | None = None,
    ) -> dict:
        """
        Create an account and log it in.

        Args:
            email: Login email
            password: Plain-text password, must satisfy the password policy
            name: Display name
            username: Public handle
            user_agent: Client user agent for the new session
            ip_address: Client address for the new session

        Returns:
            dict: message, token, user

        Raises:
            ValidationError: If a field is malformed
            ConflictError: If email or username is already taken
        """
        email = email.strip()
        username = username.strip()
        name = name.strip()

        if not name:
            raise ValidationError("Name is required", field="name")
        if not is_valid_email(email):
            raise ValidationError("Invalid email format", field="email")
        if not is_valid_username(username):
            raise ValidationError(
                f"Username must be {USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters "
                "of letters, digits, underscores or dots",
                field="username",
            )
        if not is_strong_password(password):
            raise ValidationError(
                "Password must be at least 8 characters and include uppercase, "
                "lowercase and a number",
                field="password",
            )

        if await user_crud.email_taken(self.db, email):
            raise ConflictError("Email already registered", field="email")
        if await user_crud.username_taken(self.db, username):
            raise ConflictError("Username already taken", field="username")

        try:
            user = await user_crud.create(
                self.db,
                email=email,
                username=username,
                name=name,
                password_hash=hash_password(password, self.settings.bcrypt_rounds),
            )
        except IntegrityError as e:
            logger.warning("Registration lost a uniqueness race", extra={"email": email})
            raise ConflictError("Email or username already taken") from e

        logger.info("User registered", extra={"user_id": str(user.id), "username": username})

        issued = await self.provider.login(self.db, user, user_agent, ip_address)
        return {
            "message": "Registration successful",
            "token": issued.token,
            "user": auth_user(user),
        }

    async def login(
        self,
        identifier: str,
        password: str,
        user_agent: str | None = None,
        ip_address: str | None = None,
    ) -> dict:
        """
        Verify credentials and start a session.

        Args:
            identifier: Email or username
            password: Plain-text password
            user_agent: Client user agent for the new session
            ip_address: Client address for the new session

        Returns:
            dict: message, token, user

        Raises:
            AuthenticationError: If the account does not exist or the password is wrong
            AuthorizationError: If the account is banned
        """
        user = await user_crud.get_by_login(self.db, identifier.strip())
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Login rejected", extra={"identifier": identifier})
            raise AuthenticationError(INVALID_CREDENTIALS)

        issued = await self.provider.login(self.db, user, user_agent, ip_address)
        logger.info("User logged in", extra={"user_id": str(user.id)})
        return {
            "message": "Login successful",
            "token": issued.token,
            "user": auth_user(user),
        }

    async def logout(self, token: str) -> None:
        """End the session behind token."""
        await self.provider.logout(self.db, token)

    async def check_username(self, username: str) -> str:
        """
        Check whether a username can be registered.

        Returns:
            str: Confirmation message

        Raises:
            ValidationError: If too short or malformed
            ConflictError: If already taken
        """
        username = username.strip()
        if len(username) < USERNAME_MIN_LENGTH:
            raise ValidationError(
                f"Username must be at least {USERNAME_MIN_LENGTH} characters long.",
                field="username",
            )
        if not is_valid_username(username):
            raise ValidationError("Username contains invalid characters.", field="username")
        if await user_crud.username_taken(self.db, username):
            raise ConflictError("Username is already taken.", field="username")
        return "Username is available."

    async def check_email(self, email: str) -> str:
        """
        Check whether an email can be registered.

        Returns:
            str: Confirmation message

        Raises:
            ValidationError: If malformed
            ConflictError: If already registered
        """
        email = email.strip()
        if not is_valid_email(email):
            raise ValidationError("Invalid email format.", field="email")
        if await user_crud.email_taken(self.db, email):
            raise ConflictError("Email is already registered.", field="email")
        return "Email is available."
