"""
Community API endpoints.

Routes:
- POST /api/communities - Create community
- GET /api/communities - List communities
- GET /api/communities/top - Top communities by members and posts
- GET /api/communities/joined - Communities the caller belongs to
- GET /api/communities/{id} - Community detail
- GET /api/communities/{id}/posts - Community posts (paginated)
- POST /api/communities/{id}/join | /leave | /toggle-membership
- PUT /api/communities/{id} - Update (creator)
- POST /api/communities/{id}/block/{user_id} - Block member (moderators)
- DELETE /api/communities/{id}/block/{user_id} - Unblock member
- DELETE /api/communities/{id} - Delete (creator or admin)

Dependencies: fastapi, explorely.application.services, explorely.models
System role: Community HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from explorely.api.deps.dependencies import (
    get_community_service,
    get_current_user,
    get_optional_user,
    get_post_service,
)
from explorely.api.routers.router_utils import handle_errors
from explorely.application.services.community_service import CommunityService
from explorely.application.services.post_service import PostService
from explorely.boundary.db.models.user_model import UserModel
from explorely.models.admin import DeletionResponse
from explorely.models.common import MessageResponse, PaginatedResponse
from explorely.models.community import (
    CommunityResponse,
    CreateCommunityRequest,
    MembershipResponse,
    UpdateCommunityRequest,
)
from explorely.models.post import PostResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/communities", tags=["communities"])


@router.post("", response_model=CommunityResponse, status_code=201)
@handle_errors
async def create_community(
    payload: CreateCommunityRequest,
    user: UserModel = Depends(get_current_user),
    community_service: CommunityService = Depends(get_community_service),
) -> CommunityResponse:
    """
    Create a community; the caller becomes member and moderator.

    Raises:
        HTTPException(409): Name already exists
    """
    community = await community_service.create_community(
        creator=user,
        name=payload.name,
        description=payload.description,
        rules=[rule.content for rule in payload.rules],
        avatar=payload.avatar,
        banner=payload.banner,
        is_private=payload.is_private,
    )
    return CommunityResponse(**community)


@router.get("", response_model=list[CommunityResponse])
@handle_errors
async def list_communities(
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    search: str | None = Query(None, max_length=100),
    viewer: UserModel | None = Depends(get_optional_user),
    community_service: CommunityService = Depends(get_community_service),
) -> list[CommunityResponse]:
    """Communities with member and post counts, newest first."""
    communities = await community_service.list_communities(viewer, limit, offset, search)
    return [CommunityResponse(**c) for c in communities]


@router.get("/top", response_model=list[CommunityResponse])
@handle_errors
async def top_communities(
    viewer: UserModel | None = Depends(get_optional_user),
    community_service: CommunityService = Depends(get_community_service),
) -> list[CommunityResponse]:
    """Three communities with the highest members + 2 * posts score."""
    return [CommunityResponse(**c) for c in await community_service.top_communities(viewer)]


@router.get("/joined", response_model=list[CommunityResponse])
@handle_errors
async def joined_communities(
    user: UserModel = Depends(get_current_user),
    community_service: CommunityService = Depends(get_community_service),
) -> list[CommunityResponse]:
    """Communities the caller is a member of."""
    return [CommunityResponse(**c) for c in await community_service.joined_communities(user)]


@router.get("/{community_id}", response_model=CommunityResponse)
@handle_errors
async def get_community(
    community_id: UUID,
    viewer: UserModel | None = Depends(get_optional_user),
    community_service: CommunityService = Depends(get_community_service),
) -> CommunityResponse:
    """
    Community detail.

    Raises:
        HTTPException(403): Caller is blocked
        HTTPException(404): Community not found
    """
    return CommunityResponse(**await community_service.get_community(community_id, viewer))


@router.get("/{community_id}/posts", response_model=PaginatedResponse[PostResponse])
@handle_errors
async def community_posts(
    community_id: UUID,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
    viewer: UserModel | None = Depends(get_optional_user),
    post_service: PostService = Depends(get_post_service),
) -> PaginatedResponse[PostResponse]:
    """Newest posts of a community."""
    result = await post_service.community_posts(community_id, viewer, page, limit)
    return PaginatedResponse[PostResponse](**result)


@router.post("/{community_id}/join", response_model=MembershipResponse)
@handle_errors
async def join_community(
    community_id: UUID,
    user: UserModel = Depends(get_current_user),
    community_service: CommunityService = Depends(get_community_service),
) -> MembershipResponse:
    """
    Join a community.

    Raises:
        HTTPException(403): Caller is blocked
        HTTPException(409): Already a member
    """
    return MembershipResponse(**await community_service.join(community_id, user))


@router.post("/{community_id}/leave", response_model=MembershipResponse)
@handle_errors
async def leave_community(
    community_id: UUID,
    user: UserModel = Depends(get_current_user),
    community_service: CommunityService = Depends(get_community_service),
) -> MembershipResponse:
    """
    Leave a community.

    Raises:
        HTTPException(400): Caller created the community
        HTTPException(409): Not a member
    """
    return MembershipResponse(**await community_service.leave(community_id, user))


@router.post("/{community_id}/toggle-membership", response_model=MembershipResponse)
@handle_errors
async def toggle_membership(
    community_id: UUID,
    user: UserModel = Depends(get_current_user),
    community_service: CommunityService = Depends(get_community_service),
) -> MembershipResponse:
    """Join or leave depending on current membership."""
    return MembershipResponse(**await community_service.toggle_membership(community_id, user))


@router.put("/{community_id}", response_model=CommunityResponse)
@handle_errors
async def update_community(
    community_id: UUID,
    payload: UpdateCommunityRequest,
    user: UserModel = Depends(get_current_user),
    community_service: CommunityService = Depends(get_community_service),
) -> CommunityResponse:
    """
    Edit a community.

    Raises:
        HTTPException(403): Caller is not the creator
    """
    community = await community_service.update_community(
        community_id,
        user,
        description=payload.description,
        rules=[rule.content for rule in payload.rules] if payload.rules is not None else None,
        avatar=payload.avatar,
        banner=payload.banner,
        is_private=payload.is_private,
    )
    return CommunityResponse(**community)


@router.post("/{community_id}/block/{user_id}", response_model=MessageResponse)
@handle_errors
async def block_member(
    community_id: UUID,
    user_id: UUID,
    user: UserModel = Depends(get_current_user),
    community_service: CommunityService = Depends(get_community_service),
) -> MessageResponse:
    """Block a user from the community (creator or moderator)."""
    return MessageResponse(**await community_service.block_member(community_id, user_id, user))


@router.delete("/{community_id}/block/{user_id}", response_model=MessageResponse)
@handle_errors
async def unblock_member(
    community_id: UUID,
    user_id: UUID,
    user: UserModel = Depends(get_current_user),
    community_service: CommunityService = Depends(get_community_service),
) -> MessageResponse:
    """Lift a block (creator or moderator)."""
    return MessageResponse(**await community_service.unblock_member(community_id, user_id, user))


@router.delete("/{community_id}", response_model=DeletionResponse)
@handle_errors
async def delete_community(
    community_id: UUID,
    user: UserModel = Depends(get_current_user),
    community_service: CommunityService = Depends(get_community_service),
) -> DeletionResponse:
    """
    Delete a community with its posts, comments and itineraries.

    Raises:
        HTTPException(403): Caller is neither creator nor admin
    """
    result = await community_service.delete_community(community_id, user)
    logger.info("Community deleted", extra={"community_id": str(community_id)})
    return DeletionResponse(**result)
