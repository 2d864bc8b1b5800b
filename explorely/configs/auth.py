"""
Authentication configuration settings.

Token signing, session lifetime, cookie and password hashing parameters.

Dependencies: pydantic, pydantic_settings
System role: Configuration for the authentication provider
"""

from pydantic import AliasChoices, Field
from pydantic_settings import SettingsConfigDict

from explorely.configs.base import BaseSettings


class AuthSettings(BaseSettings):
    """Session and token configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AUTH_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    session_secret: str = Field(
        default="change-me",
        validation_alias=AliasChoices("AUTH_SESSION_SECRET", "SESSION_SECRET"),
        description="Secret used to sign bearer tokens",
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    session_max_age_hours: int = Field(
        default=24,
        description="Idle lifetime of a server-side session, refreshed on activity",
    )
    token_max_age_days: int = Field(
        default=30,
        description="Absolute lifetime of an issued bearer token",
    )
    cookie_name: str = Field(default="token", description="Cookie mirroring the bearer token")
    cookie_secure: bool = Field(default=False, description="Mark the token cookie Secure")
    bcrypt_rounds: int = Field(default=12, description="bcrypt cost factor")
