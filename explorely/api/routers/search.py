"""
Search API endpoint.

Routes:
- GET /api/search?query=&type=all|posts|communities - Posts and communities

Dependencies: fastapi, explorely.application.services, explorely.models
System role: Search HTTP API
"""

from fastapi import APIRouter, Depends, Query

from explorely.api.deps.dependencies import get_optional_user, get_search_service
from explorely.api.routers.router_utils import handle_errors
from explorely.application.services.search_service import SearchService
from explorely.boundary.db.models.user_model import UserModel
from explorely.models.search import SearchResponse

router = APIRouter(prefix="/api/search", tags=["search"])


@router.get("", response_model=SearchResponse)
@handle_errors
async def search(
    query: str = Query("", max_length=200),
    search_type: str = Query("all", alias="type"),
    viewer: UserModel | None = Depends(get_optional_user),
    search_service: SearchService = Depends(get_search_service),
) -> SearchResponse:
    """
    Search public posts and communities by substring.

    Raises:
        HTTPException(400): Blank query or unknown type
    """
    return SearchResponse(**await search_service.search(query, search_type, viewer))
