"""
Community itinerary API endpoints.

Routes:
- POST /api/itineraries/community/{community_id} - Share itinerary (members)
- GET /api/itineraries/community/{community_id} - Itineraries of a community
- GET /api/itineraries/{id} - Itinerary detail
- PUT /api/itineraries/{id} - Update (author)
- DELETE /api/itineraries/{id} - Delete (author)
- POST /api/itineraries/{id}/join | /leave - Participation
- POST /api/itineraries/{id}/activities - Add activity (author)
- DELETE /api/itineraries/{id}/activities/{index} - Remove activity (author)

Dependencies: fastapi, explorely.application.services, explorely.models
System role: Community itinerary HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from explorely.api.deps.dependencies import (
    get_community_itinerary_service,
    get_current_user,
    get_optional_user,
)
from explorely.api.routers.router_utils import handle_errors, itinerary_fields, stored_item
from explorely.application.services.itinerary_service import CommunityItineraryService
from explorely.boundary.db.models.user_model import UserModel
from explorely.models.admin import DeletionResponse
from explorely.models.itinerary import (
    Activity,
    CommunityItineraryResponse,
    CreateItineraryRequest,
    UpdateItineraryRequest,
)

router = APIRouter(prefix="/api/itineraries", tags=["itineraries"])


@router.post(
    "/community/{community_id}",
    response_model=CommunityItineraryResponse,
    status_code=201,
)
@handle_errors
async def create_itinerary(
    community_id: UUID,
    payload: CreateItineraryRequest,
    user: UserModel = Depends(get_current_user),
    service: CommunityItineraryService = Depends(get_community_itinerary_service),
) -> CommunityItineraryResponse:
    """
    Share a trip plan; community members are notified.

    Raises:
        HTTPException(400): End date before start date
        HTTPException(403): Caller is not a member
    """
    itinerary = await service.create_itinerary(community_id, user, itinerary_fields(payload))
    return CommunityItineraryResponse(**itinerary)


@router.get("/community/{community_id}", response_model=list[CommunityItineraryResponse])
@handle_errors
async def list_itineraries(
    community_id: UUID,
    viewer: UserModel | None = Depends(get_optional_user),
    service: CommunityItineraryService = Depends(get_community_itinerary_service),
) -> list[CommunityItineraryResponse]:
    """Itineraries of a community, soonest first."""
    itineraries = await service.list_itineraries(community_id, viewer)
    return [CommunityItineraryResponse(**i) for i in itineraries]


@router.get("/{itinerary_id}", response_model=CommunityItineraryResponse)
@handle_errors
async def get_itinerary(
    itinerary_id: UUID,
    viewer: UserModel | None = Depends(get_optional_user),
    service: CommunityItineraryService = Depends(get_community_itinerary_service),
) -> CommunityItineraryResponse:
    """Itinerary detail."""
    return CommunityItineraryResponse(**await service.get_itinerary(itinerary_id, viewer))


@router.put("/{itinerary_id}", response_model=CommunityItineraryResponse)
@handle_errors
async def update_itinerary(
    itinerary_id: UUID,
    payload: UpdateItineraryRequest,
    user: UserModel = Depends(get_current_user),
    service: CommunityItineraryService = Depends(get_community_itinerary_service),
) -> CommunityItineraryResponse:
    """Edit an itinerary the caller authored."""
    itinerary = await service.update_itinerary(itinerary_id, user, itinerary_fields(payload))
    return CommunityItineraryResponse(**itinerary)


@router.delete("/{itinerary_id}", response_model=DeletionResponse)
@handle_errors
async def delete_itinerary(
    itinerary_id: UUID,
    user: UserModel = Depends(get_current_user),
    service: CommunityItineraryService = Depends(get_community_itinerary_service),
) -> DeletionResponse:
    """Delete an itinerary the caller authored."""
    return DeletionResponse(**await service.delete_itinerary(itinerary_id, user))


@router.post("/{itinerary_id}/join", response_model=CommunityItineraryResponse)
@handle_errors
async def join_itinerary(
    itinerary_id: UUID,
    user: UserModel = Depends(get_current_user),
    service: CommunityItineraryService = Depends(get_community_itinerary_service),
) -> CommunityItineraryResponse:
    """Join as a participant (community members only)."""
    return CommunityItineraryResponse(**await service.join(itinerary_id, user))


@router.post("/{itinerary_id}/leave", response_model=CommunityItineraryResponse)
@handle_errors
async def leave_itinerary(
    itinerary_id: UUID,
    user: UserModel = Depends(get_current_user),
    service: CommunityItineraryService = Depends(get_community_itinerary_service),
) -> CommunityItineraryResponse:
    """Stop participating."""
    return CommunityItineraryResponse(**await service.leave(itinerary_id, user))


@router.post("/{itinerary_id}/activities", response_model=CommunityItineraryResponse)
@handle_errors
async def add_activity(
    itinerary_id: UUID,
    payload: Activity,
    user: UserModel = Depends(get_current_user),
    service: CommunityItineraryService = Depends(get_community_itinerary_service),
) -> CommunityItineraryResponse:
    """Append an activity."""
    itinerary = await service.add_activity(itinerary_id, user, stored_item(payload))
    return CommunityItineraryResponse(**itinerary)


@router.delete("/{itinerary_id}/activities/{index}", response_model=CommunityItineraryResponse)
@handle_errors
async def remove_activity(
    itinerary_id: UUID,
    index: int,
    user: UserModel = Depends(get_current_user),
    service: CommunityItineraryService = Depends(get_community_itinerary_service),
) -> CommunityItineraryResponse:
    """
    Remove the activity at index.

    Raises:
        HTTPException(404): Index out of range
    """
    return CommunityItineraryResponse(**await service.remove_activity(itinerary_id, user, index))
