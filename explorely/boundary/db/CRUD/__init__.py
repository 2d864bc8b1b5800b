"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from explorely.boundary.db.CRUD import user_crud, post_crud

    # Use singleton instances
    user = await user_crud.get_by_id(db, user_id)
"""

from explorely.boundary.db.CRUD.base_crud import BaseCRUD
from explorely.boundary.db.CRUD.user_crud import UserCRUD, user_crud
from explorely.boundary.db.CRUD.auth_session_crud import AuthSessionCRUD, auth_session_crud
from explorely.boundary.db.CRUD.community_crud import CommunityCRUD, community_crud
from explorely.boundary.db.CRUD.post_crud import PostCRUD, post_crud
from explorely.boundary.db.CRUD.comment_crud import CommentCRUD, comment_crud
from explorely.boundary.db.CRUD.review_crud import ReviewCRUD, review_crud
from explorely.boundary.db.CRUD.review_comment_crud import (
    ReviewCommentCRUD,
    review_comment_crud,
)
from explorely.boundary.db.CRUD.itinerary_crud import (
    CommunityItineraryCRUD,
    UserItineraryCRUD,
    community_itinerary_crud,
    user_itinerary_crud,
)
from explorely.boundary.db.CRUD.notification_crud import NotificationCRUD, notification_crud
from explorely.boundary.db.CRUD.report_crud import ReportCRUD, report_crud

__all__ = [
    "BaseCRUD",
    "UserCRUD",
    "user_crud",
    "AuthSessionCRUD",
    "auth_session_crud",
    "CommunityCRUD",
    "community_crud",
    "PostCRUD",
    "post_crud",
    "CommentCRUD",
    "comment_crud",
    "ReviewCRUD",
    "review_crud",
    "ReviewCommentCRUD",
    "review_comment_crud",
    "CommunityItineraryCRUD",
    "UserItineraryCRUD",
    "community_itinerary_crud",
    "user_itinerary_crud",
    "NotificationCRUD",
    "notification_crud",
    "ReportCRUD",
    "report_crud",
]
