"""
Review API endpoints.

Routes:
- POST /api/reviews - Write review
- GET /api/reviews - List (category, sort, pagination)
- GET /api/reviews/search - Search title, content and location
- GET /api/reviews/trending - Most liked reviews created today
- GET /api/reviews/{id} - Review detail
- GET /api/reviews/{id}/like-status - Caller's like state
- POST /api/reviews/{id}/like - Toggle like
- DELETE /api/reviews/{id} - Delete own review

Dependencies: fastapi, explorely.application.services, explorely.models
System role: Review HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from explorely.api.deps.dependencies import (
    get_current_user,
    get_optional_user,
    get_review_service,
)
from explorely.api.routers.router_utils import handle_errors
from explorely.application.services.review_service import ReviewService
from explorely.boundary.db.models.review_model import ReviewCategory
from explorely.boundary.db.models.user_model import UserModel
from explorely.models.admin import DeletionResponse
from explorely.models.comment import LikeResponse
from explorely.models.common import PaginatedResponse
from explorely.models.review import CreateReviewRequest, ReviewResponse

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.post("", response_model=ReviewResponse, status_code=201)
@handle_errors
async def create_review(
    payload: CreateReviewRequest,
    user: UserModel = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service),
) -> ReviewResponse:
    """Publish a review."""
    review = await review_service.create_review(user, **payload.model_dump())
    return ReviewResponse(**review)


@router.get("", response_model=PaginatedResponse[ReviewResponse])
@handle_errors
async def list_reviews(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
    category: ReviewCategory | None = None,
    sort: str = Query("recent"),
    viewer: UserModel | None = Depends(get_optional_user),
    review_service: ReviewService = Depends(get_review_service),
) -> PaginatedResponse[ReviewResponse]:
    """
    Page of reviews.

    Raises:
        HTTPException(400): Unknown sort option
    """
    result = await review_service.list_reviews(viewer, page, limit, category=category, sort=sort)
    return PaginatedResponse[ReviewResponse](**result)


@router.get("/search", response_model=PaginatedResponse[ReviewResponse])
@handle_errors
async def search_reviews(
    q: str = Query("", max_length=200),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
    viewer: UserModel | None = Depends(get_optional_user),
    review_service: ReviewService = Depends(get_review_service),
) -> PaginatedResponse[ReviewResponse]:
    """
    Reviews matching a text query.

    Raises:
        HTTPException(400): Empty query
    """
    result = await review_service.search_reviews(q, viewer, page, limit)
    return PaginatedResponse[ReviewResponse](**result)


@router.get("/trending", response_model=list[ReviewResponse])
@handle_errors
async def trending_reviews(
    viewer: UserModel | None = Depends(get_optional_user),
    review_service: ReviewService = Depends(get_review_service),
) -> list[ReviewResponse]:
    """Most liked reviews created today."""
    return [ReviewResponse(**r) for r in await review_service.trending(viewer)]


@router.get("/{review_id}", response_model=ReviewResponse)
@handle_errors
async def get_review(
    review_id: UUID,
    viewer: UserModel | None = Depends(get_optional_user),
    review_service: ReviewService = Depends(get_review_service),
) -> ReviewResponse:
    """Review detail."""
    return ReviewResponse(**await review_service.get_review(review_id, viewer))


@router.get("/{review_id}/like-status", response_model=LikeResponse)
@handle_errors
async def like_status(
    review_id: UUID,
    user: UserModel = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service),
) -> LikeResponse:
    """Whether the caller likes the review."""
    return LikeResponse(**await review_service.like_status(review_id, user))


@router.post("/{review_id}/like", response_model=LikeResponse)
@handle_errors
async def toggle_like(
    review_id: UUID,
    user: UserModel = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service),
) -> LikeResponse:
    """Like or unlike a review; the author is notified of likes."""
    return LikeResponse(**await review_service.toggle_like(review_id, user))


@router.delete("/{review_id}", response_model=DeletionResponse)
@handle_errors
async def delete_review(
    review_id: UUID,
    user: UserModel = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service),
) -> DeletionResponse:
    """Delete a review with its comments and likes."""
    return DeletionResponse(**await review_service.delete_review(review_id, user))
