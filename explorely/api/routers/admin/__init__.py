"""
Admin router package.

Mounts the moderation console under /api/admin. Every route requires an
authenticated admin: 401 without a valid token, 403 for other users.
"""

from fastapi import APIRouter, Depends

from explorely.api.deps.dependencies import require_admin

from .content_router import router as content_router
from .reports_router import router as reports_router
from .users_router import router as users_router

router = APIRouter(
    prefix="/api/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)
router.include_router(content_router)
router.include_router(users_router)
router.include_router(reports_router)

__all__ = ["router"]
