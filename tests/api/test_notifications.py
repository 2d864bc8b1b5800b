"""
API tests for notification fan-out and delivery.

System role: Verification of the notification contract end to end
"""

import pytest

from explorely.boundary.db.models import NotificationModel, NotificationType


@pytest.fixture
def post_setup(client, register, create_community, create_post):
    """Author A owns a post in a community that B has joined."""
    author = register("author_aa")
    liker = register("liker_bb")
    community = create_community(author)
    client.post(f"/api/communities/{community['id']}/join", headers=liker["headers"])
    post = create_post(author, community["id"])
    return author, liker, community, post


def _recent(client, account) -> dict:
    response = client.get("/api/notifications/recent", headers=account["headers"])
    assert response.status_code == 200
    return response.json()


class TestPostLike:
    def test_upvote_notifies_author(self, client, post_setup) -> None:
        author, liker, community, post = post_setup

        client.post(f"/api/posts/{post['id']}/upvote", headers=liker["headers"])
        recent = _recent(client, author)

        assert recent["unseenCount"] >= 1
        like = recent["notifications"][0]
        assert like["type"] == "POST_LIKE"
        assert like["sender"]["username"] == "liker_bb"
        assert like["post"]["id"] == post["id"]
        assert like["comment"] is None

    def test_mark_seen_zeroes_badge(self, client, post_setup) -> None:
        author, liker, community, post = post_setup
        client.post(f"/api/posts/{post['id']}/upvote", headers=liker["headers"])

        response = client.post("/api/notifications/mark-seen", headers=author["headers"])

        assert response.status_code == 200
        recent = _recent(client, author)
        assert recent["unseenCount"] == 0
        assert recent["unreadCount"] >= 1

    def test_unvote_retracts_notification(self, client, post_setup, count_rows) -> None:
        author, liker, community, post = post_setup
        url = f"/api/posts/{post['id']}/upvote"

        client.post(url, headers=liker["headers"])
        client.post(url, headers=liker["headers"])

        assert (
            count_rows(NotificationModel, NotificationModel.type == NotificationType.POST_LIKE)
            == 0
        )

    def test_repeat_upvote_is_not_duplicated(self, client, post_setup, count_rows) -> None:
        author, liker, community, post = post_setup
        base = f"/api/posts/{post['id']}"
        client.post(f"{base}/upvote", headers=liker["headers"])
        client.post("/api/notifications/mark-read", headers=author["headers"])

        # Read notifications survive the unvote, so the re-vote hits the dedup window
        client.post(f"{base}/upvote", headers=liker["headers"])
        client.post(f"{base}/upvote", headers=liker["headers"])

        assert (
            count_rows(NotificationModel, NotificationModel.type == NotificationType.POST_LIKE)
            == 1
        )

    def test_self_vote_does_not_notify(self, client, post_setup, count_rows) -> None:
        author, liker, community, post = post_setup

        client.post(f"/api/posts/{post['id']}/upvote", headers=author["headers"])

        assert (
            count_rows(NotificationModel, NotificationModel.recipient_id == author["id"]) == 0
        )


class TestFanOut:
    def test_community_post_reaches_members_except_author(
        self, client, post_setup, count_rows
    ) -> None:
        author, liker, community, post = post_setup

        recent = _recent(client, liker)

        assert recent["notifications"][0]["type"] == "COMMUNITY_POST"
        assert recent["notifications"][0]["community"]["name"] == "Backpackers"
        assert recent["notifications"][0]["post"]["title"] == "Hidden beaches"
        assert (
            count_rows(
                NotificationModel,
                NotificationModel.type == NotificationType.COMMUNITY_POST,
                NotificationModel.recipient_id == author["id"],
            )
            == 0
        )

    def test_comment_and_reply_routing(self, client, post_setup, register) -> None:
        author, liker, community, post = post_setup
        third = register("third_cc")
        url = f"/api/comments/post/{post['id']}"

        root = client.post(url, json={"content": "Love it"}, headers=liker["headers"]).json()
        client.post(
            url, json={"content": "Same", "parentId": root["id"]}, headers=third["headers"]
        )

        author_types = [n["type"] for n in _recent(client, author)["notifications"]]
        liker_types = [n["type"] for n in _recent(client, liker)["notifications"]]
        assert "POST_COMMENT" in author_types
        assert "COMMENT_REPLY" not in author_types
        assert "COMMENT_REPLY" in liker_types


class TestDelivery:
    def test_pages_do_not_overlap(self, client, register, create_community) -> None:
        owner = register("owner_one")
        member = register("member_one")
        community_ids = []
        for index in range(25):
            community = create_community(member, name=f"Community {index:02d}")
            community_ids.append(community["id"])
            client.post(f"/api/communities/{community['id']}/join", headers=owner["headers"])
        for community_id in community_ids:
            client.post(
                "/api/posts",
                json={"title": "Post", "content": "Body", "communityId": community_id},
                headers=member["headers"],
            )

        first = client.get(
            "/api/notifications", params={"page": 1}, headers=owner["headers"]
        ).json()
        second = client.get(
            "/api/notifications", params={"page": 2}, headers=owner["headers"]
        ).json()

        first_ids = {n["id"] for n in first["notifications"]}
        second_ids = {n["id"] for n in second["notifications"]}
        assert first["total"] == 25
        assert len(first_ids) == 20
        assert first["hasMore"] is True
        assert len(second_ids) == 5
        assert second["hasMore"] is False
        assert first_ids.isdisjoint(second_ids)

    def test_recent_is_capped(self, client, post_setup, register) -> None:
        author, liker, community, post = post_setup
        for index in range(7):
            fan = register(f"fan_user{index}")
            client.post(f"/api/posts/{post['id']}/upvote", headers=fan["headers"])

        recent = _recent(client, author)

        assert len(recent["notifications"]) == 5
        assert recent["unseenCount"] == 7

    def test_mark_one_read_requires_ownership(self, client, post_setup) -> None:
        author, liker, community, post = post_setup
        client.post(f"/api/posts/{post['id']}/upvote", headers=liker["headers"])
        notification_id = _recent(client, author)["notifications"][0]["id"]

        foreign = client.post(
            f"/api/notifications/{notification_id}/mark-read", headers=liker["headers"]
        )
        own = client.post(
            f"/api/notifications/{notification_id}/mark-read", headers=author["headers"]
        )

        assert foreign.status_code == 404
        assert own.status_code == 200
        assert _recent(client, author)["notifications"][0]["isRead"] is True

    def test_requires_authentication(self, client) -> None:
        assert client.get("/api/notifications/recent").status_code == 401
