"""
Admin user management endpoints.

Routes:
- GET /api/admin/stats - Platform overview
- GET /api/admin/users - All users (filter, search, pagination)
- GET /api/admin/users/active - Users who are not banned
- GET /api/admin/users/banned - Banned users
- PUT /api/admin/users/{id}/ban - Ban a user
- PUT /api/admin/users/{id}/unban - Lift a ban
- DELETE /api/admin/users/{id} - Delete a user and everything they own

Dependencies: fastapi, explorely.application.services
System role: Admin user moderation HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from explorely.api.deps.dependencies import get_admin_service, require_admin
from explorely.api.routers.router_utils import handle_errors
from explorely.application.services.admin_service import AdminService
from explorely.boundary.db.models.user_model import UserModel
from explorely.models.admin import AdminStatsResponse, AdminUserResponse, DeletionResponse
from explorely.models.common import MessageResponse, PaginatedResponse

router = APIRouter()


@router.get("/stats", response_model=AdminStatsResponse)
@handle_errors
async def get_stats(
    admin_service: AdminService = Depends(get_admin_service),
) -> AdminStatsResponse:
    """Totals, 30-day activity and top communities."""
    return AdminStatsResponse(**await admin_service.stats())


async def _user_page(
    admin_service: AdminService,
    page: int,
    limit: int,
    filter: str,
    search: str | None,
    banned: bool | None,
) -> PaginatedResponse[AdminUserResponse]:
    result = await admin_service.list_users(page, limit, filter=filter, search=search, banned=banned)
    return PaginatedResponse[AdminUserResponse](**result)


@router.get("/users", response_model=PaginatedResponse[AdminUserResponse])
@handle_errors
async def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    filter: str = Query("all"),
    search: str | None = Query(None),
    admin_service: AdminService = Depends(get_admin_service),
) -> PaginatedResponse[AdminUserResponse]:
    """
    Paginated users.

    Args:
        filter: "all" or "reported"
        search: Matches username, email or name

    Raises:
        HTTPException(400): Unknown filter
    """
    return await _user_page(admin_service, page, limit, filter, search, None)


@router.get("/users/active", response_model=PaginatedResponse[AdminUserResponse])
@handle_errors
async def list_active_users(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str | None = Query(None),
    admin_service: AdminService = Depends(get_admin_service),
) -> PaginatedResponse[AdminUserResponse]:
    """Users who are not banned."""
    return await _user_page(admin_service, page, limit, "all", search, False)


@router.get("/users/banned", response_model=PaginatedResponse[AdminUserResponse])
@handle_errors
async def list_banned_users(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str | None = Query(None),
    admin_service: AdminService = Depends(get_admin_service),
) -> PaginatedResponse[AdminUserResponse]:
    """Banned users."""
    return await _user_page(admin_service, page, limit, "all", search, True)


@router.put("/users/{user_id}/ban", response_model=MessageResponse)
@handle_errors
async def ban_user(
    user_id: UUID,
    admin: UserModel = Depends(require_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> MessageResponse:
    """
    Ban a user and end their sessions.

    Raises:
        HTTPException(400): Admin tried to ban themselves
        HTTPException(404): User not found
    """
    return MessageResponse(**await admin_service.set_banned(admin, user_id, True))


@router.put("/users/{user_id}/unban", response_model=MessageResponse)
@handle_errors
async def unban_user(
    user_id: UUID,
    admin: UserModel = Depends(require_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> MessageResponse:
    """Lift a ban."""
    return MessageResponse(**await admin_service.set_banned(admin, user_id, False))


@router.delete("/users/{user_id}", response_model=DeletionResponse)
@handle_errors
async def delete_user(
    user_id: UUID,
    admin: UserModel = Depends(require_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> DeletionResponse:
    """Delete a user through the deletion policy."""
    return DeletionResponse(**await admin_service.delete_user(admin, user_id))
