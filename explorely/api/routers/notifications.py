"""
Notification delivery endpoints.

Routes:
- GET /api/notifications/recent - Dropdown payload with badge counters
- GET /api/notifications - Paginated history
- POST /api/notifications/mark-seen - Clear the unseen badge
- POST /api/notifications/mark-read - Mark everything read
- POST /api/notifications/{id}/mark-read - Mark one read

Dependencies: fastapi, explorely.application.services
System role: Notification HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from explorely.api.deps.dependencies import get_current_user, get_notification_service
from explorely.api.routers.router_utils import handle_errors
from explorely.application.services.notification_service import NotificationService
from explorely.boundary.db.models.user_model import UserModel
from explorely.models.common import SuccessResponse
from explorely.models.notification import (
    NotificationPageResponse,
    RecentNotificationsResponse,
)

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("/recent", response_model=RecentNotificationsResponse)
@handle_errors
async def recent_notifications(
    user: UserModel = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service),
) -> RecentNotificationsResponse:
    """Newest notifications plus unseen and unread counts."""
    recent = await notification_service.get_recent(user.id)
    return RecentNotificationsResponse(**recent)


@router.get("", response_model=NotificationPageResponse)
@handle_errors
async def list_notifications(
    page: int = Query(1, ge=1),
    user: UserModel = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service),
) -> NotificationPageResponse:
    """
    One page of notification history, newest first.

    Args:
        page: 1-based page number
    """
    return NotificationPageResponse(**await notification_service.get_page(user.id, page))


@router.post("/mark-seen", response_model=SuccessResponse)
@handle_errors
async def mark_seen(
    user: UserModel = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service),
) -> SuccessResponse:
    """Flag every notification as seen (dropdown opened)."""
    await notification_service.mark_all_seen(user.id)
    return SuccessResponse()


@router.post("/mark-read", response_model=SuccessResponse)
@handle_errors
async def mark_all_read(
    user: UserModel = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service),
) -> SuccessResponse:
    """Flag every notification as read."""
    await notification_service.mark_all_read(user.id)
    return SuccessResponse()


@router.post("/{notification_id}/mark-read", response_model=SuccessResponse)
@handle_errors
async def mark_read(
    notification_id: UUID,
    user: UserModel = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service),
) -> SuccessResponse:
    """
    Flag one notification as read.

    Raises:
        HTTPException(404): Not found or owned by someone else
    """
    await notification_service.mark_read(user.id, notification_id)
    return SuccessResponse()
