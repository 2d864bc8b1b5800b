"""
ORM-to-dict converters shared by the services.

Services return plain dicts; routers turn them into response models.

Dependencies: explorely.boundary.db.models
System role: Entity serialization
"""

from explorely.boundary.db.models import (
    CommentModel,
    CommunityModel,
    PostModel,
    ReportModel,
    ReviewCommentModel,
    ReviewModel,
    UserModel,
)


def user_summary(user: UserModel | None) -> dict | None:
    """Author/sender block."""
    if user is None:
        return None
    return {
        "id": user.id,
        "username": user.username,
        "name": user.name,
        "avatar": user.avatar,
    }


def community_summary(community: CommunityModel | None) -> dict | None:
    """Community block."""
    if community is None:
        return None
    return {"id": community.id, "name": community.name, "avatar": community.avatar}


def auth_user(user: UserModel) -> dict:
    """Principal block returned by login and registration."""
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "username": user.username,
        "avatar": user.avatar,
        "is_admin": user.is_admin,
    }


def post_dict(post: PostModel, user_vote: int = 0, comment_count: int = 0) -> dict:
    """Post with author and community."""
    return {
        "id": post.id,
        "title": post.title,
        "content": post.content,
        "media": list(post.media or []),
        "author": user_summary(post.author),
        "community": community_summary(post.community),
        "vote_count": post.vote_count,
        "user_vote": user_vote,
        "comment_count": comment_count,
        "created_at": post.created_at,
        "updated_at": post.updated_at,
    }


def comment_dict(comment: CommentModel, is_liked: bool = False) -> dict:
    """Comment node without replies."""
    return {
        "id": comment.id,
        "content": comment.content,
        "author": user_summary(comment.author),
        "post_id": comment.post_id,
        "parent_id": comment.parent_id,
        "level": comment.level,
        "like_count": comment.like_count,
        "is_liked": is_liked,
        "is_edited": comment.is_edited,
        "created_at": comment.created_at,
        "replies": [],
    }


def review_dict(review: ReviewModel, is_liked: bool = False) -> dict:
    """Review with author."""
    return {
        "id": review.id,
        "title": review.title,
        "content": review.content,
        "location": review.location,
        "user_city": review.user_city,
        "user_country": review.user_country,
        "category": review.category,
        "rating": review.rating,
        "images": list(review.images or []),
        "author": user_summary(review.author),
        "like_count": review.like_count,
        "comment_count": review.comment_count,
        "is_liked": is_liked,
        "created_at": review.created_at,
    }


def review_comment_dict(comment: ReviewCommentModel, is_liked: bool = False) -> dict:
    """Review comment node without replies."""
    return {
        "id": comment.id,
        "content": comment.content,
        "author": user_summary(comment.author),
        "review_id": comment.review_id,
        "parent_id": comment.parent_id,
        "like_count": comment.like_count,
        "is_liked": is_liked,
        "created_at": comment.created_at,
        "replies": [],
    }


def report_dict(report: ReportModel) -> dict:
    """Report with reporter."""
    return {
        "id": report.id,
        "reporter": user_summary(report.reporter),
        "reported_type": report.reported_type,
        "reported_item_id": report.reported_item_id,
        "reason": report.reason,
        "status": report.status,
        "admin_notes": report.admin_notes,
        "resolved_by_id": report.resolved_by_id,
        "resolved_at": report.resolved_at,
        "created_at": report.created_at,
    }


def community_card(community: CommunityModel, member_count: int, post_count: int) -> dict:
    """Community as listed by search and explore."""
    return {
        "id": community.id,
        "name": community.name,
        "description": community.description,
        "avatar": community.avatar,
        "member_count": member_count,
        "post_count": post_count,
    }
