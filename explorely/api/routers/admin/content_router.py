"""
Admin content moderation endpoints.

Routes:
- GET /api/admin/communities | /posts | /reviews - Paginated listings
  with filter=all|reported and search
- DELETE /api/admin/communities/{id} | /posts/{id} | /reviews/{id}

Dependencies: fastapi, explorely.application.services
System role: Admin content moderation HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from explorely.api.deps.dependencies import get_admin_service
from explorely.api.routers.router_utils import handle_errors
from explorely.application.services.admin_service import AdminService
from explorely.models.admin import (
    AdminCommunityResponse,
    AdminPostResponse,
    AdminReviewResponse,
    DeletionResponse,
)
from explorely.models.common import PaginatedResponse

router = APIRouter()


@router.get("/communities", response_model=PaginatedResponse[AdminCommunityResponse])
@handle_errors
async def list_communities(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    filter: str = Query("all"),
    search: str | None = Query(None),
    admin_service: AdminService = Depends(get_admin_service),
) -> PaginatedResponse[AdminCommunityResponse]:
    """Communities with member and post counts."""
    result = await admin_service.list_communities(page, limit, filter=filter, search=search)
    return PaginatedResponse[AdminCommunityResponse](**result)


@router.delete("/communities/{community_id}", response_model=DeletionResponse)
@handle_errors
async def delete_community(
    community_id: UUID,
    admin_service: AdminService = Depends(get_admin_service),
) -> DeletionResponse:
    """Delete a community with its posts, comments and itineraries."""
    return DeletionResponse(**await admin_service.delete_entity("community", community_id))


@router.get("/posts", response_model=PaginatedResponse[AdminPostResponse])
@handle_errors
async def list_posts(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    filter: str = Query("all"),
    search: str | None = Query(None),
    admin_service: AdminService = Depends(get_admin_service),
) -> PaginatedResponse[AdminPostResponse]:
    """Posts, newest first."""
    result = await admin_service.list_posts(page, limit, filter=filter, search=search)
    return PaginatedResponse[AdminPostResponse](**result)


@router.delete("/posts/{post_id}", response_model=DeletionResponse)
@handle_errors
async def delete_post(
    post_id: UUID,
    admin_service: AdminService = Depends(get_admin_service),
) -> DeletionResponse:
    """Delete a post with its comments."""
    return DeletionResponse(**await admin_service.delete_entity("post", post_id))


@router.get("/reviews", response_model=PaginatedResponse[AdminReviewResponse])
@handle_errors
async def list_reviews(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    filter: str = Query("all"),
    search: str | None = Query(None),
    admin_service: AdminService = Depends(get_admin_service),
) -> PaginatedResponse[AdminReviewResponse]:
    """Reviews, newest first."""
    result = await admin_service.list_reviews(page, limit, filter=filter, search=search)
    return PaginatedResponse[AdminReviewResponse](**result)


@router.delete("/reviews/{review_id}", response_model=DeletionResponse)
@handle_errors
async def delete_review(
    review_id: UUID,
    admin_service: AdminService = Depends(get_admin_service),
) -> DeletionResponse:
    """Delete a review with its comments."""
    return DeletionResponse(**await admin_service.delete_entity("review", review_id))
