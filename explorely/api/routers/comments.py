"""
Comment API endpoints.

Routes:
- GET /api/comments/post/{post_id} - Comment tree of a post
- POST /api/comments/post/{post_id} - Comment or reply
- PUT /api/comments/{id} - Edit own comment
- DELETE /api/comments/{id} - Delete comment and replies
- POST /api/comments/{id}/like - Toggle like

Dependencies: fastapi, explorely.application.services, explorely.models
System role: Post comment HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from explorely.api.deps.dependencies import (
    get_comment_service,
    get_current_user,
    get_optional_user,
)
from explorely.api.routers.router_utils import handle_errors
from explorely.application.services.comment_service import CommentService
from explorely.boundary.db.models.user_model import UserModel
from explorely.models.admin import DeletionResponse
from explorely.models.comment import (
    CommentResponse,
    CreateCommentRequest,
    LikeResponse,
    UpdateCommentRequest,
)

router = APIRouter(prefix="/api/comments", tags=["comments"])


@router.get("/post/{post_id}", response_model=list[CommentResponse])
@handle_errors
async def list_comments(
    post_id: UUID,
    viewer: UserModel | None = Depends(get_optional_user),
    comment_service: CommentService = Depends(get_comment_service),
) -> list[CommentResponse]:
    """Top-level comments, newest first, each with nested replies."""
    tree = await comment_service.list_comments(post_id, viewer)
    return [CommentResponse(**node) for node in tree]


@router.post("/post/{post_id}", response_model=CommentResponse, status_code=201)
@handle_errors
async def create_comment(
    post_id: UUID,
    payload: CreateCommentRequest,
    user: UserModel = Depends(get_current_user),
    comment_service: CommentService = Depends(get_comment_service),
) -> CommentResponse:
    """
    Comment on a post, or reply when parentId is given.

    Raises:
        HTTPException(400): Reply too deep
        HTTPException(404): Post or parent comment not found
    """
    comment = await comment_service.create_comment(
        post_id, user, payload.content, payload.parent_id
    )
    return CommentResponse(**comment)


@router.put("/{comment_id}", response_model=CommentResponse)
@handle_errors
async def update_comment(
    comment_id: UUID,
    payload: UpdateCommentRequest,
    user: UserModel = Depends(get_current_user),
    comment_service: CommentService = Depends(get_comment_service),
) -> CommentResponse:
    """Edit one's own comment."""
    return CommentResponse(**await comment_service.update_comment(comment_id, user, payload.content))


@router.delete("/{comment_id}", response_model=DeletionResponse)
@handle_errors
async def delete_comment(
    comment_id: UUID,
    user: UserModel = Depends(get_current_user),
    comment_service: CommentService = Depends(get_comment_service),
) -> DeletionResponse:
    """Delete a comment and its replies."""
    return DeletionResponse(**await comment_service.delete_comment(comment_id, user))


@router.post("/{comment_id}/like", response_model=LikeResponse)
@handle_errors
async def toggle_like(
    comment_id: UUID,
    user: UserModel = Depends(get_current_user),
    comment_service: CommentService = Depends(get_comment_service),
) -> LikeResponse:
    """Like or unlike a comment."""
    return LikeResponse(**await comment_service.toggle_like(comment_id, user))
