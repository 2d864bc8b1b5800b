"""API routers."""

from .admin import router as admin_router  # Package: users, content, reports
from .auth import router as auth_router
from .comments import router as comments_router
from .communities import router as communities_router
from .explore import router as explore_router
from .health import router as health_router
from .itineraries import router as itineraries_router
from .notifications import router as notifications_router
from .posts import router as posts_router
from .reports import router as reports_router
from .review_comments import router as review_comments_router
from .reviews import router as reviews_router
from .search import router as search_router
from .user_itineraries import router as user_itineraries_router
from .users import router as users_router

__all__ = [
    "admin_router",
    "auth_router",
    "comments_router",
    "communities_router",
    "explore_router",
    "health_router",
    "itineraries_router",
    "notifications_router",
    "posts_router",
    "reports_router",
    "review_comments_router",
    "reviews_router",
    "search_router",
    "user_itineraries_router",
    "users_router",
]
