"""
Authentication schemas.

Request/response schemas for registration, login and availability checks.

Dependencies: pydantic
System role: Auth API contracts
"""

import uuid

from pydantic import Field

from explorely.models.common import APIModel


class RegisterRequest(APIModel):
    """Request schema for creating an account."""

    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)
    name: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=1, max_length=30)


class LoginRequest(APIModel):
    """Request schema for logging in; email may also hold a username."""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class AuthUser(APIModel):
    """Principal returned after login or registration."""

    id: uuid.UUID
    email: str
    name: str
    username: str
    avatar: str
    is_admin: bool = False


class AuthResponse(APIModel):
    """Login/registration result; token is also set as a cookie."""

    message: str
    token: str
    user: AuthUser


class AvailabilityResponse(APIModel):
    """Result of a username/email availability check."""

    message: str
    available: bool = True
