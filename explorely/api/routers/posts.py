"""
Post API endpoints.

Routes:
- POST /api/posts - Create post in a community
- GET /api/posts/feed - Posts from the caller's communities
- GET /api/posts/public - Posts from public communities
- GET /api/posts/{id} - Post detail
- POST /api/posts/{id}/upvote | /downvote - Toggle vote
- DELETE /api/posts/{id} - Delete (author or admin)

Dependencies: fastapi, explorely.application.services, explorely.models
System role: Post HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from explorely.api.deps.dependencies import (
    get_current_user,
    get_optional_user,
    get_post_service,
)
from explorely.api.routers.router_utils import handle_errors
from explorely.application.services.post_service import DOWNVOTE, UPVOTE, PostService
from explorely.boundary.db.models.user_model import UserModel
from explorely.models.admin import DeletionResponse
from explorely.models.common import PaginatedResponse
from explorely.models.post import CreatePostRequest, PostResponse, VoteResponse

router = APIRouter(prefix="/api/posts", tags=["posts"])


@router.post("", response_model=PostResponse, status_code=201)
@handle_errors
async def create_post(
    payload: CreatePostRequest,
    user: UserModel = Depends(get_current_user),
    post_service: PostService = Depends(get_post_service),
) -> PostResponse:
    """
    Publish a post; members of the community are notified.

    Raises:
        HTTPException(403): Caller is not a member or is blocked
        HTTPException(404): Community not found
    """
    post = await post_service.create_post(
        author=user,
        community_id=payload.community_id,
        title=payload.title,
        content=payload.content,
        media=payload.media,
    )
    return PostResponse(**post)


@router.get("/feed", response_model=PaginatedResponse[PostResponse])
@handle_errors
async def home_feed(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
    user: UserModel = Depends(get_current_user),
    post_service: PostService = Depends(get_post_service),
) -> PaginatedResponse[PostResponse]:
    """Posts from joined communities, highest voted then newest."""
    return PaginatedResponse[PostResponse](**await post_service.home_feed(user, page, limit))


@router.get("/public", response_model=PaginatedResponse[PostResponse])
@handle_errors
async def public_feed(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
    viewer: UserModel | None = Depends(get_optional_user),
    post_service: PostService = Depends(get_post_service),
) -> PaginatedResponse[PostResponse]:
    """Posts from every public community."""
    return PaginatedResponse[PostResponse](**await post_service.public_feed(viewer, page, limit))


@router.get("/{post_id}", response_model=PostResponse)
@handle_errors
async def get_post(
    post_id: UUID,
    viewer: UserModel | None = Depends(get_optional_user),
    post_service: PostService = Depends(get_post_service),
) -> PostResponse:
    """
    Post detail.

    Raises:
        HTTPException(404): Post not found
    """
    return PostResponse(**await post_service.get_post(post_id, viewer))


@router.post("/{post_id}/upvote", response_model=VoteResponse)
@handle_errors
async def upvote(
    post_id: UUID,
    user: UserModel = Depends(get_current_user),
    post_service: PostService = Depends(get_post_service),
) -> VoteResponse:
    """Toggle an upvote; the author is notified of new upvotes."""
    return VoteResponse(**await post_service.vote(post_id, user, UPVOTE))


@router.post("/{post_id}/downvote", response_model=VoteResponse)
@handle_errors
async def downvote(
    post_id: UUID,
    user: UserModel = Depends(get_current_user),
    post_service: PostService = Depends(get_post_service),
) -> VoteResponse:
    """Toggle a downvote."""
    return VoteResponse(**await post_service.vote(post_id, user, DOWNVOTE))


@router.delete("/{post_id}", response_model=DeletionResponse)
@handle_errors
async def delete_post(
    post_id: UUID,
    user: UserModel = Depends(get_current_user),
    post_service: PostService = Depends(get_post_service),
) -> DeletionResponse:
    """
    Delete a post with its comments and votes.

    Raises:
        HTTPException(403): Caller is neither author nor admin
    """
    return DeletionResponse(**await post_service.delete_post(post_id, user))
