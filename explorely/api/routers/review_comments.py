"""
Review comment API endpoints.

Routes:
- GET /api/review-comments/review/{review_id} - Comments with replies (paginated)
- POST /api/review-comments/review/{review_id} - Comment or reply
- DELETE /api/review-comments/{id} - Delete own comment
- POST /api/review-comments/{id}/like - Toggle like

Dependencies: fastapi, explorely.application.services, explorely.models
System role: Review comment HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from explorely.api.deps.dependencies import (
    get_current_user,
    get_optional_user,
    get_review_comment_service,
)
from explorely.api.routers.router_utils import handle_errors
from explorely.application.services.review_comment_service import ReviewCommentService
from explorely.boundary.db.models.user_model import UserModel
from explorely.models.admin import DeletionResponse
from explorely.models.comment import LikeResponse
from explorely.models.common import PaginatedResponse
from explorely.models.review import CreateReviewCommentRequest, ReviewCommentResponse

router = APIRouter(prefix="/api/review-comments", tags=["review-comments"])


@router.get("/review/{review_id}", response_model=PaginatedResponse[ReviewCommentResponse])
@handle_errors
async def list_comments(
    review_id: UUID,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
    viewer: UserModel | None = Depends(get_optional_user),
    service: ReviewCommentService = Depends(get_review_comment_service),
) -> PaginatedResponse[ReviewCommentResponse]:
    """Newest top-level comments with their replies."""
    result = await service.list_comments(review_id, viewer, page, limit)
    return PaginatedResponse[ReviewCommentResponse](**result)


@router.post("/review/{review_id}", response_model=ReviewCommentResponse, status_code=201)
@handle_errors
async def create_comment(
    review_id: UUID,
    payload: CreateReviewCommentRequest,
    user: UserModel = Depends(get_current_user),
    service: ReviewCommentService = Depends(get_review_comment_service),
) -> ReviewCommentResponse:
    """
    Comment on a review, or reply when parentId is given.

    Raises:
        HTTPException(400): Reply to a reply
        HTTPException(404): Review or parent comment not found
    """
    comment = await service.create_comment(review_id, user, payload.content, payload.parent_id)
    return ReviewCommentResponse(**comment)


@router.delete("/{comment_id}", response_model=DeletionResponse)
@handle_errors
async def delete_comment(
    comment_id: UUID,
    user: UserModel = Depends(get_current_user),
    service: ReviewCommentService = Depends(get_review_comment_service),
) -> DeletionResponse:
    """Delete a review comment and its replies."""
    return DeletionResponse(**await service.delete_comment(comment_id, user))


@router.post("/{comment_id}/like", response_model=LikeResponse)
@handle_errors
async def toggle_like(
    comment_id: UUID,
    user: UserModel = Depends(get_current_user),
    service: ReviewCommentService = Depends(get_review_comment_service),
) -> LikeResponse:
    """Like or unlike a review comment."""
    return LikeResponse(**await service.toggle_like(comment_id, user))
