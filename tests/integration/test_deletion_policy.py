"""
Test suite for the cascading deletion policy.

Builds a small graph of users, a community, posts, comments, votes and
notifications in SQLite, then deletes roots and checks what is left.

System role: Verification of referential cleanup on delete
"""

import pytest
from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from explorely.boundary.db.models import (
    CommentLikeModel,
    CommentModel,
    CommunityModel,
    NotificationModel,
    NotificationType,
    PostModel,
    PostVoteModel,
    ReportModel,
    ReportReason,
    ReportStatus,
    ReportedType,
    ReviewCategory,
    ReviewCommentModel,
    ReviewLikeModel,
    ReviewModel,
    UserModel,
    community_members,
)
from explorely.core.deletion_policy import DELETION_POLICY, ROOT_TABLES, delete_entities


async def _count(session: AsyncSession, target) -> int:
    return (await session.execute(select(func.count()).select_from(target))).scalar_one()


@pytest.fixture
async def graph(test_async_db: AsyncSession) -> dict:
    """Two users, a community, a post with a reply thread, and side rows."""
    owner = UserModel(email="owner@example.com", username="owner_one", name="Owner", password_hash="x")
    guest = UserModel(email="guest@example.com", username="guest_one", name="Guest", password_hash="x")
    test_async_db.add_all([owner, guest])
    await test_async_db.flush()

    community = CommunityModel(name="Backpackers", description="Tips", creator_id=owner.id)
    test_async_db.add(community)
    await test_async_db.flush()
    await test_async_db.execute(
        insert(community_members),
        [
            {"community_id": community.id, "user_id": owner.id},
            {"community_id": community.id, "user_id": guest.id},
        ],
    )

    post = PostModel(title="Beaches", content="Where?", author_id=owner.id, community_id=community.id)
    test_async_db.add(post)
    await test_async_db.flush()

    top = CommentModel(content="Here", author_id=guest.id, post_id=post.id, level=0)
    test_async_db.add(top)
    await test_async_db.flush()
    reply = CommentModel(content="Thanks", author_id=owner.id, post_id=post.id, parent_id=top.id, level=1)
    test_async_db.add(reply)
    await test_async_db.flush()

    test_async_db.add_all(
        [
            PostVoteModel(post_id=post.id, user_id=guest.id, value=1),
            CommentLikeModel(comment_id=reply.id, user_id=guest.id),
            NotificationModel(
                recipient_id=owner.id,
                sender_id=guest.id,
                type=NotificationType.POST_LIKE,
                post_id=post.id,
            ),
            ReportModel(
                reporter_id=guest.id,
                reported_type=ReportedType.POST,
                reported_post_id=post.id,
                reason=ReportReason.SPAM,
                status=ReportStatus.PENDING,
            ),
        ]
    )
    await test_async_db.flush()
    return {"owner": owner, "guest": guest, "community": community, "post": post, "top": top}


class TestDeletionPolicy:
    """Test suite for delete_entities."""

    def test_every_kind_has_a_root_table(self) -> None:
        assert set(DELETION_POLICY) == set(ROOT_TABLES)

    def test_nested_kinds_are_known(self) -> None:
        for dependents in DELETION_POLICY.values():
            for dependent in dependents:
                assert dependent.kind is None or dependent.kind in DELETION_POLICY

    @pytest.mark.asyncio
    async def test_deleting_comment_removes_subtree(
        self, test_async_db: AsyncSession, graph: dict
    ) -> None:
        """Test a comment takes its replies and their likes with it."""
        # Act
        removed = await delete_entities(test_async_db, "comment", [graph["top"].id])

        # Assert
        assert removed == {"comments": 2, "comment_likes": 1}
        assert await _count(test_async_db, CommentModel) == 0
        assert await _count(test_async_db, PostModel) == 1

    @pytest.mark.asyncio
    async def test_deleting_community_removes_content(
        self, test_async_db: AsyncSession, graph: dict
    ) -> None:
        # Act
        removed = await delete_entities(test_async_db, "community", [graph["community"].id])

        # Assert
        assert removed["communities"] == 1
        assert removed["posts"] == 1
        assert removed["comments"] == 2
        assert removed["post_votes"] == 1
        assert removed["community_members"] == 2
        assert removed["notifications"] == 1
        assert removed["reports"] == 1
        assert await _count(test_async_db, UserModel) == 2

    @pytest.mark.asyncio
    async def test_deleting_user_removes_everything_they_own(
        self, test_async_db: AsyncSession, graph: dict
    ) -> None:
        """Test a user's community goes with them; the other account stays."""
        # Act
        removed = await delete_entities(test_async_db, "user", [graph["owner"].id])

        # Assert
        assert removed["users"] == 1
        assert removed["communities"] == 1
        assert await _count(test_async_db, UserModel) == 1
        assert await _count(test_async_db, CommentModel) == 0
        assert await _count(test_async_db, NotificationModel) == 0
        assert await _count(test_async_db, community_members) == 0

    @pytest.mark.asyncio
    async def test_deleting_user_recounts_what_they_fed(
        self, test_async_db: AsyncSession, graph: dict
    ) -> None:
        """Test counters on surviving content drop the deleted user's rows."""
        # Arrange
        owner, guest, post = graph["owner"], graph["guest"], graph["post"]
        post.vote_count = 1
        post.report_count = 1
        review = ReviewModel(
            title="Night market",
            content="Great food",
            author_id=owner.id,
            location="Taipei",
            user_city="Lisbon",
            user_country="Portugal",
            category=ReviewCategory.RESTAURANT,
            rating=5,
            like_count=1,
            comment_count=2,
        )
        test_async_db.add(review)
        await test_async_db.flush()
        test_async_db.add_all(
            [
                ReviewLikeModel(review_id=review.id, user_id=guest.id),
                ReviewCommentModel(content="Agreed", author_id=guest.id, review_id=review.id),
                ReviewCommentModel(content="Thanks", author_id=owner.id, review_id=review.id),
            ]
        )
        await test_async_db.flush()

        # Act
        await delete_entities(test_async_db, "user", [guest.id])

        # Assert
        post_row = (
            await test_async_db.execute(
                select(PostModel.vote_count, PostModel.report_count).where(PostModel.id == post.id)
            )
        ).one()
        review_row = (
            await test_async_db.execute(
                select(ReviewModel.like_count, ReviewModel.comment_count).where(
                    ReviewModel.id == review.id
                )
            )
        ).one()
        assert tuple(post_row) == (0, 0)
        assert tuple(review_row) == (0, 1)

    @pytest.mark.asyncio
    async def test_review_reply_delete_leaves_comment_count_alone(
        self, test_async_db: AsyncSession, graph: dict
    ) -> None:
        """Test only top-level review comments feed comment_count."""
        # Arrange
        owner, guest = graph["owner"], graph["guest"]
        review = ReviewModel(
            title="Night market",
            content="Great food",
            author_id=owner.id,
            location="Taipei",
            user_city="Lisbon",
            user_country="Portugal",
            category=ReviewCategory.RESTAURANT,
            rating=5,
            comment_count=1,
        )
        test_async_db.add(review)
        await test_async_db.flush()
        top = ReviewCommentModel(content="Which stall?", author_id=owner.id, review_id=review.id)
        test_async_db.add(top)
        await test_async_db.flush()
        test_async_db.add(
            ReviewCommentModel(
                content="The third one", author_id=guest.id, review_id=review.id, parent_id=top.id
            )
        )
        await test_async_db.flush()

        # Act
        removed = await delete_entities(test_async_db, "user", [guest.id])

        # Assert
        assert removed["review_comments"] == 1
        count = await test_async_db.execute(
            select(ReviewModel.comment_count).where(ReviewModel.id == review.id)
        )
        assert count.scalar_one() == 1

    @pytest.mark.asyncio
    async def test_empty_ids_is_a_no_op(self, test_async_db: AsyncSession) -> None:
        assert await delete_entities(test_async_db, "post", []) == {}
