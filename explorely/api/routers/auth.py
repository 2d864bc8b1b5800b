"""
Authentication API endpoints.

Routes:
- POST /auth/register - Create account and log in
- POST /auth/login - Log in with email or username
- POST /auth/logout - End the current session
- GET /auth/protected - Check that the caller is authenticated
- GET /auth/check-username - Username availability
- GET /auth/check-email - Email availability

The issued token is returned in the body and mirrored into the token
cookie; either can be sent back.

Dependencies: fastapi, explorely.application.services, explorely.models
System role: Account access HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, Response

from explorely.api.deps.dependencies import (
    extract_token,
    get_auth_service,
    get_current_user,
    get_settings_dependency,
)
from explorely.api.routers.router_utils import (
    clear_auth_cookie,
    client_info,
    handle_errors,
    set_auth_cookie,
)
from explorely.application.services.auth_service import AuthService
from explorely.boundary.db.models.user_model import UserModel
from explorely.configs import Settings
from explorely.core.exceptions import AuthenticationError
from explorely.models.auth import (
    AuthResponse,
    AvailabilityResponse,
    LoginRequest,
    RegisterRequest,
)
from explorely.models.common import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


async def register_account(
    payload: RegisterRequest,
    request: Request,
    response: Response,
    auth_service: AuthService,
    settings: Settings,
) -> AuthResponse:
    """Shared by /auth/register and /api/users/register."""
    user_agent, ip_address = client_info(request)
    result = await auth_service.register(
        email=payload.email,
        password=payload.password,
        name=payload.name,
        username=payload.username,
        user_agent=user_agent,
        ip_address=ip_address,
    )
    set_auth_cookie(response, result["token"], settings.auth)
    return AuthResponse(**result)


async def login_account(
    payload: LoginRequest,
    request: Request,
    response: Response,
    auth_service: AuthService,
    settings: Settings,
) -> AuthResponse:
    """Shared by /auth/login and /api/users/login."""
    user_agent, ip_address = client_info(request)
    result = await auth_service.login(
        identifier=payload.email,
        password=payload.password,
        user_agent=user_agent,
        ip_address=ip_address,
    )
    set_auth_cookie(response, result["token"], settings.auth)
    return AuthResponse(**result)


async def logout_account(
    request: Request,
    response: Response,
    auth_service: AuthService,
    settings: Settings,
) -> MessageResponse:
    """
    Shared by /auth/logout and /api/users/logout.

    Logging out with a missing or stale token still clears the cookie.
    """
    token = extract_token(request)
    if token is not None:
        try:
            await auth_service.logout(token)
        except AuthenticationError as e:
            logger.info("Logout with unusable token", extra={"reason": e.message})
    clear_auth_cookie(response, settings.auth)
    return MessageResponse(message="Logged out successfully")


@router.post("/register", response_model=AuthResponse, status_code=201)
@handle_errors
async def register(
    payload: RegisterRequest,
    request: Request,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings_dependency),
) -> AuthResponse:
    """
    Create an account and log it in.

    Raises:
        HTTPException(400): Malformed field or weak password
        HTTPException(409): Email or username taken
    """
    return await register_account(payload, request, response, auth_service, settings)


@router.post("/login", response_model=AuthResponse)
@handle_errors
async def login(
    payload: LoginRequest,
    request: Request,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings_dependency),
) -> AuthResponse:
    """
    Log in with email (or username) and password.

    Raises:
        HTTPException(401): Invalid credentials
        HTTPException(403): Banned account
    """
    return await login_account(payload, request, response, auth_service, settings)


@router.post("/logout", response_model=MessageResponse)
@handle_errors
async def logout(
    request: Request,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings_dependency),
) -> MessageResponse:
    """End the caller's session and clear the cookie."""
    return await logout_account(request, response, auth_service, settings)


@router.get("/protected", response_model=MessageResponse)
async def protected(user: UserModel = Depends(get_current_user)) -> MessageResponse:
    """Succeeds only for an authenticated caller."""
    return MessageResponse(message="Welcome to the protected route!")


@router.get("/check-username", response_model=AvailabilityResponse)
@handle_errors
async def check_username(
    username: str = Query(..., min_length=1, max_length=100),
    auth_service: AuthService = Depends(get_auth_service),
) -> AvailabilityResponse:
    """
    Check whether a username can be registered.

    Raises:
        HTTPException(400): Too short or malformed
        HTTPException(409): Already taken
    """
    return AvailabilityResponse(message=await auth_service.check_username(username))


@router.get("/check-email", response_model=AvailabilityResponse)
@handle_errors
async def check_email(
    email: str = Query(..., min_length=1, max_length=255),
    auth_service: AuthService = Depends(get_auth_service),
) -> AvailabilityResponse:
    """
    Check whether an email can be registered.

    Raises:
        HTTPException(400): Malformed email
        HTTPException(409): Already registered
    """
    return AvailabilityResponse(message=await auth_service.check_email(email))
