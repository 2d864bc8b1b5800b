"""
Dependency injection container.

Factory functions for FastAPI dependencies. Everything shared comes from
the AppContext on app.state; services are built per request around the
request's database session.

Dependencies: fastapi, explorely.core, explorely.application, explorely.boundary
System role: DI container for service and principal injection
"""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from explorely.application.services import (
    AdminService,
    AuthService,
    CommentService,
    CommunityItineraryService,
    CommunityService,
    ExploreService,
    NotificationService,
    PostService,
    ReportService,
    ReviewCommentService,
    ReviewService,
    SearchService,
    UserItineraryService,
    UserService,
)
from explorely.boundary.db import get_async_db
from explorely.boundary.db.models.user_model import UserModel
from explorely.configs import Settings
from explorely.core.context import AppContext
from explorely.core.exceptions import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "Unauthorized access"
ADMIN_REQUIRED_MESSAGE = "Access denied. Admin privileges required."

# Exits when the route function returns, so the commit lands before the
# response is sent. Every dependency shares this one session per request.
DBSession = Annotated[AsyncSession, Depends(get_async_db, scope="function")]


def get_context(request: Request) -> AppContext:
    """Application context built by the lifespan."""
    return request.app.state.context


def get_settings_dependency(context: AppContext = Depends(get_context)) -> Settings:
    """Settings the running application was built with."""
    return context.settings


def extract_token(request: Request) -> str | None:
    """
    Read the bearer token from the Authorization header or the token cookie.

    Args:
        request: Incoming request

    Returns:
        str | None: Raw token, or None when the request carries none
    """
    header = request.headers.get("Authorization")
    if header:
        scheme, _, credentials = header.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    cookie_name = request.app.state.context.settings.auth.cookie_name
    return request.cookies.get(cookie_name) or None


async def get_optional_user(
    request: Request,
    db: DBSession,
    context: AppContext = Depends(get_context),
) -> UserModel | None:
    """
    Authenticated user when a valid token is present, otherwise None.

    An invalid or expired token counts as anonymous; a banned account still
    gets 403.
    """
    token = extract_token(request)
    if token is None:
        return None
    try:
        return await context.auth_provider.authenticate(db, token)
    except AuthenticationError:
        return None
    except AuthorizationError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message) from e


async def get_current_user(
    request: Request,
    db: DBSession,
    context: AppContext = Depends(get_context),
) -> UserModel:
    """
    Authenticated user, required.

    Raises:
        HTTPException(401): Missing, invalid or expired token
        HTTPException(403): Banned account
    """
    token = extract_token(request)
    if token is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED_MESSAGE)
    try:
        return await context.auth_provider.authenticate(db, token)
    except AuthenticationError as e:
        logger.info(
            "Rejected request credentials",
            extra={"path": request.url.path, "reason": e.message},
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED_MESSAGE
        ) from e
    except AuthorizationError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message) from e


async def require_admin(user: UserModel = Depends(get_current_user)) -> UserModel:
    """
    Authenticated admin, required.

    Raises:
        HTTPException(403): Caller is not an admin
    """
    if not user.is_admin:
        logger.warning("Non-admin hit admin route", extra={"user_id": str(user.id)})
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=ADMIN_REQUIRED_MESSAGE)
    return user


def get_notification_service(
    db: DBSession,
    settings: Settings = Depends(get_settings_dependency),
) -> NotificationService:
    """
    Get notification service instance.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings (injected via Depends)

    Returns:
        NotificationService: Notification service instance
    """
    return NotificationService(db=db, settings=settings.notifications)


def get_auth_service(
    db: DBSession,
    context: AppContext = Depends(get_context),
) -> AuthService:
    """
    Get auth service instance.

    Args:
        db: Async database session (injected via Depends)
        context: Application context holding the auth provider

    Returns:
        AuthService: Auth service instance
    """
    return AuthService(db=db, provider=context.auth_provider, settings=context.settings.auth)


def get_user_service(db: DBSession) -> UserService:
    """Get user service instance."""
    return UserService(db=db)


def get_community_service(db: DBSession) -> CommunityService:
    """Get community service instance."""
    return CommunityService(db=db)


def get_post_service(
    db: DBSession,
    notifications: NotificationService = Depends(get_notification_service),
) -> PostService:
    """Get post service instance."""
    return PostService(db=db, notifications=notifications)


def get_comment_service(
    db: DBSession,
    notifications: NotificationService = Depends(get_notification_service),
) -> CommentService:
    """Get comment service instance."""
    return CommentService(db=db, notifications=notifications)


def get_review_service(
    db: DBSession,
    notifications: NotificationService = Depends(get_notification_service),
) -> ReviewService:
    """Get review service instance."""
    return ReviewService(db=db, notifications=notifications)


def get_review_comment_service(
    db: DBSession,
    notifications: NotificationService = Depends(get_notification_service),
) -> ReviewCommentService:
    """Get review comment service instance."""
    return ReviewCommentService(db=db, notifications=notifications)


def get_community_itinerary_service(
    db: DBSession,
    notifications: NotificationService = Depends(get_notification_service),
) -> CommunityItineraryService:
    """Get community itinerary service instance."""
    return CommunityItineraryService(db=db, notifications=notifications)


def get_user_itinerary_service(db: DBSession) -> UserItineraryService:
    """Get personal itinerary service instance."""
    return UserItineraryService(db=db)


def get_report_service(db: DBSession) -> ReportService:
    """Get report service instance."""
    return ReportService(db=db)


def get_admin_service(db: DBSession) -> AdminService:
    """Get admin service instance."""
    return AdminService(db=db)


def get_search_service(db: DBSession) -> SearchService:
    """Get search service instance."""
    return SearchService(db=db)


def get_explore_service(db: DBSession) -> ExploreService:
    """Get explore service instance."""
    return ExploreService(db=db)
