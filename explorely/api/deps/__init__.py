"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    DBSession,
    extract_token,
    get_admin_service,
    get_auth_service,
    get_comment_service,
    get_community_itinerary_service,
    get_community_service,
    get_context,
    get_current_user,
    get_explore_service,
    get_notification_service,
    get_optional_user,
    get_post_service,
    get_report_service,
    get_review_comment_service,
    get_review_service,
    get_search_service,
    get_settings_dependency,
    get_user_itinerary_service,
    get_user_service,
    require_admin,
)

__all__ = [
    "DBSession",
    "extract_token",
    "get_admin_service",
    "get_auth_service",
    "get_comment_service",
    "get_community_itinerary_service",
    "get_community_service",
    "get_context",
    "get_current_user",
    "get_explore_service",
    "get_notification_service",
    "get_optional_user",
    "get_post_service",
    "get_report_service",
    "get_review_comment_service",
    "get_review_service",
    "get_search_service",
    "get_settings_dependency",
    "get_user_itinerary_service",
    "get_user_service",
    "require_admin",
]
