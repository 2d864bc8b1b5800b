"""
Database models package.

Exports every ORM model and enum so that importing this package registers
all tables on Base.metadata.

Dependencies: sqlalchemy, explorely.boundary.db.base
System role: Database model definitions for domain entities
"""

from explorely.boundary.db.models.user_model import DEFAULT_AVATAR, DEFAULT_BIO, UserModel
from explorely.boundary.db.models.auth_session_model import AuthSessionModel
from explorely.boundary.db.models.community_model import (
    CommunityModel,
    CommunityRuleModel,
    community_blocked_members,
    community_members,
    community_moderators,
)
from explorely.boundary.db.models.post_model import PostModel, PostVoteModel
from explorely.boundary.db.models.comment_model import (
    MAX_COMMENT_LEVEL,
    CommentLikeModel,
    CommentModel,
)
from explorely.boundary.db.models.review_model import (
    ReviewCategory,
    ReviewCommentLikeModel,
    ReviewCommentModel,
    ReviewLikeModel,
    ReviewModel,
)
from explorely.boundary.db.models.itinerary_model import (
    CommunityItineraryModel,
    ItineraryStatus,
    UserItineraryModel,
    itinerary_participants,
)
from explorely.boundary.db.models.notification_model import (
    NotificationModel,
    NotificationType,
)
from explorely.boundary.db.models.report_model import (
    REPORTED_COLUMNS,
    ReportModel,
    ReportReason,
    ReportStatus,
    ReportedType,
)

__all__ = [
    "DEFAULT_AVATAR",
    "DEFAULT_BIO",
    "UserModel",
    "AuthSessionModel",
    "CommunityModel",
    "CommunityRuleModel",
    "community_members",
    "community_moderators",
    "community_blocked_members",
    "PostModel",
    "PostVoteModel",
    "MAX_COMMENT_LEVEL",
    "CommentModel",
    "CommentLikeModel",
    "ReviewCategory",
    "ReviewModel",
    "ReviewLikeModel",
    "ReviewCommentModel",
    "ReviewCommentLikeModel",
    "ItineraryStatus",
    "CommunityItineraryModel",
    "UserItineraryModel",
    "itinerary_participants",
    "NotificationType",
    "NotificationModel",
    "ReportedType",
    "ReportReason",
    "ReportStatus",
    "REPORTED_COLUMNS",
    "ReportModel",
]
