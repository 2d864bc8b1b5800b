"""Service orchestrators."""

from .admin_service import AdminService
from .auth_service import AuthService
from .comment_service import CommentService
from .community_service import CommunityService
from .explore_service import ExploreService
from .itinerary_service import CommunityItineraryService, UserItineraryService
from .notification_service import NotificationService
from .post_service import PostService
from .report_service import ReportService
from .review_comment_service import ReviewCommentService
from .review_service import ReviewService
from .search_service import SearchService
from .user_service import UserService

__all__ = [
    "AdminService",
    "AuthService",
    "CommentService",
    "CommunityItineraryService",
    "CommunityService",
    "ExploreService",
    "NotificationService",
    "PostService",
    "ReportService",
    "ReviewCommentService",
    "ReviewService",
    "SearchService",
    "UserItineraryService",
    "UserService",
]
