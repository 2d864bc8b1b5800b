"""
Explore API endpoint.

Routes:
- GET /api/explore - Trending communities and posts of the last 24 hours

Dependencies: fastapi, explorely.application.services, explorely.models
System role: Discovery HTTP API
"""

from fastapi import APIRouter, Depends

from explorely.api.deps.dependencies import get_explore_service, get_optional_user
from explorely.api.routers.router_utils import handle_errors
from explorely.application.services.explore_service import ExploreService
from explorely.boundary.db.models.user_model import UserModel
from explorely.models.search import ExploreResponse

router = APIRouter(prefix="/api/explore", tags=["explore"])


@router.get("", response_model=ExploreResponse)
@handle_errors
async def explore(
    viewer: UserModel | None = Depends(get_optional_user),
    explore_service: ExploreService = Depends(get_explore_service),
) -> ExploreResponse:
    """Largest communities and the highest voted recent public posts."""
    return ExploreResponse(**await explore_service.explore(viewer))
