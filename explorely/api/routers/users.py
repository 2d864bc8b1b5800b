"""
User API endpoints.

Routes:
- POST /api/users/register, /login, /logout - Same as the /auth routes
- GET /api/users/profile - Own profile
- PATCH /api/users/profile - Edit own profile
- GET /api/users/check-admin - Whether the caller is an admin
- GET /api/users/{id} - Public profile

Dependencies: fastapi, explorely.application.services, explorely.models
System role: User profile HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response

from explorely.api.deps.dependencies import (
    get_auth_service,
    get_current_user,
    get_settings_dependency,
    get_user_service,
)
from explorely.api.routers.auth import login_account, logout_account, register_account
from explorely.api.routers.router_utils import handle_errors
from explorely.application.services.auth_service import AuthService
from explorely.application.services.user_service import UserService
from explorely.boundary.db.models.user_model import UserModel
from explorely.configs import Settings
from explorely.models.auth import AuthResponse, LoginRequest, RegisterRequest
from explorely.models.common import MessageResponse
from explorely.models.user import (
    AdminCheckResponse,
    PublicUserResponse,
    UpdateProfileRequest,
    UserProfileResponse,
)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/register", response_model=AuthResponse, status_code=201)
@handle_errors
async def register(
    payload: RegisterRequest,
    request: Request,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings_dependency),
) -> AuthResponse:
    """Create an account and log it in."""
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
    """Log in with email (or username) and password."""
    return await login_account(payload, request, response, auth_service, settings)


@router.post("/logout", response_model=MessageResponse)
@handle_errors
async def logout(
    request: Request,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings_dependency),
) -> MessageResponse:
    """End the caller's session."""
    return await logout_account(request, response, auth_service, settings)


@router.get("/profile", response_model=UserProfileResponse)
@handle_errors
async def get_profile(
    user: UserModel = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> UserProfileResponse:
    """Own profile with email and account flags."""
    return UserProfileResponse(**await user_service.get_own_profile(user))


@router.patch("/profile", response_model=UserProfileResponse)
@handle_errors
async def update_profile(
    payload: UpdateProfileRequest,
    user: UserModel = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> UserProfileResponse:
    """
    Edit name, username, bio or avatar.

    Raises:
        HTTPException(400): Malformed field
        HTTPException(409): Username taken
    """
    profile = await user_service.update_profile(
        user,
        name=payload.name,
        username=payload.username,
        bio=payload.bio,
        avatar=payload.avatar,
    )
    return UserProfileResponse(**profile)


@router.get("/check-admin", response_model=AdminCheckResponse)
async def check_admin(user: UserModel = Depends(get_current_user)) -> AdminCheckResponse:
    """Whether the caller holds admin rights."""
    return AdminCheckResponse(is_admin=user.is_admin)


@router.get("/{user_id}", response_model=PublicUserResponse)
@handle_errors
async def get_user(
    user_id: UUID,
    user_service: UserService = Depends(get_user_service),
) -> PublicUserResponse:
    """
    Public profile with joined communities.

    Raises:
        HTTPException(404): User not found
    """
    return PublicUserResponse(**await user_service.get_public_profile(user_id))
