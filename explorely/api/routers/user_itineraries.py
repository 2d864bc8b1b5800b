"""
Personal itinerary API endpoints.

Routes:
- POST /api/user-itineraries - Create
- GET /api/user-itineraries - Caller's itineraries
- GET /api/user-itineraries/{id} - Detail
- PUT /api/user-itineraries/{id} - Update
- DELETE /api/user-itineraries/{id} - Delete
- POST /api/user-itineraries/{id}/{section} - Add entry
- PUT /api/user-itineraries/{id}/{section}/{index} - Replace entry
- DELETE /api/user-itineraries/{id}/{section}/{index} - Remove entry

section is one of activities, accommodations, restaurants.

Dependencies: fastapi, explorely.application.services, explorely.models
System role: Personal itinerary HTTP API
"""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends

from explorely.api.deps.dependencies import get_current_user, get_user_itinerary_service
from explorely.api.routers.router_utils import handle_errors, itinerary_fields, section_item
from explorely.application.services.itinerary_service import UserItineraryService
from explorely.boundary.db.models.user_model import UserModel
from explorely.models.common import MessageResponse
from explorely.models.itinerary import (
    CreateItineraryRequest,
    ItineraryResponse,
    UpdateItineraryRequest,
)

router = APIRouter(prefix="/api/user-itineraries", tags=["user-itineraries"])


@router.post("", response_model=ItineraryResponse, status_code=201)
@handle_errors
async def create_itinerary(
    payload: CreateItineraryRequest,
    user: UserModel = Depends(get_current_user),
    service: UserItineraryService = Depends(get_user_itinerary_service),
) -> ItineraryResponse:
    """Create a personal itinerary."""
    return ItineraryResponse(**await service.create_itinerary(user, itinerary_fields(payload)))


@router.get("", response_model=list[ItineraryResponse])
@handle_errors
async def list_itineraries(
    user: UserModel = Depends(get_current_user),
    service: UserItineraryService = Depends(get_user_itinerary_service),
) -> list[ItineraryResponse]:
    """The caller's itineraries, soonest first."""
    return [ItineraryResponse(**i) for i in await service.list_itineraries(user)]


@router.get("/{itinerary_id}", response_model=ItineraryResponse)
@handle_errors
async def get_itinerary(
    itinerary_id: UUID,
    user: UserModel = Depends(get_current_user),
    service: UserItineraryService = Depends(get_user_itinerary_service),
) -> ItineraryResponse:
    """Itinerary detail (own itineraries only)."""
    return ItineraryResponse(**await service.get_itinerary(itinerary_id, user))


@router.put("/{itinerary_id}", response_model=ItineraryResponse)
@handle_errors
async def update_itinerary(
    itinerary_id: UUID,
    payload: UpdateItineraryRequest,
    user: UserModel = Depends(get_current_user),
    service: UserItineraryService = Depends(get_user_itinerary_service),
) -> ItineraryResponse:
    """Edit an itinerary."""
    itinerary = await service.update_itinerary(itinerary_id, user, itinerary_fields(payload))
    return ItineraryResponse(**itinerary)


@router.delete("/{itinerary_id}", response_model=MessageResponse)
@handle_errors
async def delete_itinerary(
    itinerary_id: UUID,
    user: UserModel = Depends(get_current_user),
    service: UserItineraryService = Depends(get_user_itinerary_service),
) -> MessageResponse:
    """Delete an itinerary."""
    return MessageResponse(**await service.delete_itinerary(itinerary_id, user))


@router.post("/{itinerary_id}/{section}", response_model=ItineraryResponse)
@handle_errors
async def add_item(
    itinerary_id: UUID,
    section: str,
    body: dict[str, Any] = Body(...),
    user: UserModel = Depends(get_current_user),
    service: UserItineraryService = Depends(get_user_itinerary_service),
) -> ItineraryResponse:
    """
    Append an activity, accommodation or restaurant.

    Raises:
        HTTPException(400): Unknown section or malformed entry
    """
    item = section_item(section, body)
    return ItineraryResponse(**await service.add_item(itinerary_id, user, section, item))


@router.put("/{itinerary_id}/{section}/{index}", response_model=ItineraryResponse)
@handle_errors
async def update_item(
    itinerary_id: UUID,
    section: str,
    index: int,
    body: dict[str, Any] = Body(...),
    user: UserModel = Depends(get_current_user),
    service: UserItineraryService = Depends(get_user_itinerary_service),
) -> ItineraryResponse:
    """
    Replace the entry at index.

    Raises:
        HTTPException(404): Index out of range
    """
    item = section_item(section, body)
    itinerary = await service.update_item(itinerary_id, user, section, index, item)
    return ItineraryResponse(**itinerary)


@router.delete("/{itinerary_id}/{section}/{index}", response_model=ItineraryResponse)
@handle_errors
async def remove_item(
    itinerary_id: UUID,
    section: str,
    index: int,
    user: UserModel = Depends(get_current_user),
    service: UserItineraryService = Depends(get_user_itinerary_service),
) -> ItineraryResponse:
    """Remove the entry at index."""
    return ItineraryResponse(**await service.remove_item(itinerary_id, user, section, index))
