"""
API tests for posts, votes, feeds and threaded comments.

System role: Verification of the post and comment contracts
"""

import pytest

from explorely.boundary.db.models import CommentModel, PostVoteModel


@pytest.fixture
def community_setup(register, create_community, client):
    """Owner, joined member and community."""
    owner = register("owner_one")
    member = register("member_one")
    community = create_community(owner)
    client.post(f"/api/communities/{community['id']}/join", headers=member["headers"])
    return owner, member, community


class TestPosts:
    def test_non_member_cannot_post(self, client, register, create_community) -> None:
        owner = register("owner_one")
        outsider = register("outsider1")
        community = create_community(owner)

        response = client.post(
            "/api/posts",
            json={"title": "Hi", "content": "Hello", "communityId": community["id"]},
            headers=outsider["headers"],
        )

        assert response.status_code == 403

    def test_create_and_get_post(self, client, community_setup, create_post) -> None:
        owner, member, community = community_setup

        post = create_post(member, community["id"])
        fetched = client.get(f"/api/posts/{post['id']}")

        assert fetched.status_code == 200
        body = fetched.json()
        assert body["title"] == "Hidden beaches"
        assert body["voteCount"] == 0
        assert body["author"]["username"] == "member_one"
        assert body["community"]["name"] == "Backpackers"

    def test_vote_toggles(self, client, community_setup, create_post) -> None:
        owner, member, community = community_setup
        post = create_post(member, community["id"])
        base = f"/api/posts/{post['id']}"

        up = client.post(f"{base}/upvote", headers=owner["headers"]).json()
        switched = client.post(f"{base}/downvote", headers=owner["headers"]).json()
        cleared = client.post(f"{base}/downvote", headers=owner["headers"]).json()

        assert up == {"voteCount": 1, "upvotes": 1, "downvotes": 0, "userVote": 1}
        assert switched["voteCount"] == -1
        assert switched["userVote"] == -1
        assert cleared["voteCount"] == 0
        assert cleared["userVote"] == 0

    def test_vote_count_matches_vote_rows(
        self, client, community_setup, create_post, register, count_rows
    ) -> None:
        owner, member, community = community_setup
        third = register("third_one")
        client.post(f"/api/communities/{community['id']}/join", headers=third["headers"])
        post = create_post(member, community["id"])
        base = f"/api/posts/{post['id']}"

        client.post(f"{base}/upvote", headers=owner["headers"])
        client.post(f"{base}/upvote", headers=third["headers"])
        client.post(f"{base}/downvote", headers=member["headers"])

        assert client.get(base).json()["voteCount"] == 1
        assert count_rows(PostVoteModel) == 3

    def test_feeds(self, client, community_setup, create_post, register) -> None:
        owner, member, community = community_setup
        outsider = register("outsider1")
        create_post(member, community["id"], title="First")
        second = create_post(member, community["id"], title="Second")
        client.post(f"/api/posts/{second['id']}/upvote", headers=owner["headers"])

        home = client.get("/api/posts/feed", headers=member["headers"]).json()
        empty_home = client.get("/api/posts/feed", headers=outsider["headers"]).json()
        public = client.get("/api/posts/public", params={"limit": 1}).json()

        assert [p["title"] for p in home["items"]] == ["Second", "First"]
        assert empty_home["items"] == []
        assert public["total"] == 2
        assert public["hasMore"] is True
        assert public["items"][0]["title"] == "Second"

    def test_only_author_deletes(self, client, community_setup, create_post) -> None:
        owner, member, community = community_setup
        post = create_post(member, community["id"])

        denied = client.delete(f"/api/posts/{post['id']}", headers=owner["headers"])
        deleted = client.delete(f"/api/posts/{post['id']}", headers=member["headers"])

        assert denied.status_code == 403
        assert deleted.status_code == 200
        assert client.get(f"/api/posts/{post['id']}").status_code == 404


class TestComments:
    def _comment(self, client, account, post_id, content="Nice", parent_id=None):
        payload = {"content": content}
        if parent_id:
            payload["parentId"] = parent_id
        return client.post(
            f"/api/comments/post/{post_id}", json=payload, headers=account["headers"]
        )

    def test_thread_is_nested(self, client, community_setup, create_post) -> None:
        owner, member, community = community_setup
        post = create_post(member, community["id"])

        root = self._comment(client, owner, post["id"], "Root").json()
        reply = self._comment(client, member, post["id"], "Reply", root["id"]).json()
        tree = client.get(f"/api/comments/post/{post['id']}").json()

        assert reply["level"] == 1
        assert len(tree) == 1
        assert tree[0]["content"] == "Root"
        assert tree[0]["replies"][0]["content"] == "Reply"

    def test_reply_depth_is_limited(self, client, community_setup, create_post) -> None:
        owner, member, community = community_setup
        post = create_post(member, community["id"])

        parent_id = None
        for _ in range(4):
            response = self._comment(client, owner, post["id"], parent_id=parent_id)
            assert response.status_code == 201
            parent_id = response.json()["id"]

        too_deep = self._comment(client, owner, post["id"], parent_id=parent_id)

        assert too_deep.status_code == 400

    def test_edit_marks_edited(self, client, community_setup, create_post) -> None:
        owner, member, community = community_setup
        post = create_post(member, community["id"])
        comment = self._comment(client, owner, post["id"]).json()

        denied = client.put(
            f"/api/comments/{comment['id']}", json={"content": "Hack"}, headers=member["headers"]
        )
        edited = client.put(
            f"/api/comments/{comment['id']}", json={"content": "Edited"}, headers=owner["headers"]
        )

        assert denied.status_code == 403
        assert edited.json()["isEdited"] is True
        assert edited.json()["content"] == "Edited"

    def test_delete_removes_reply_subtree(
        self, client, community_setup, create_post, count_rows
    ) -> None:
        owner, member, community = community_setup
        post = create_post(member, community["id"])
        root = self._comment(client, owner, post["id"]).json()
        self._comment(client, member, post["id"], parent_id=root["id"])

        response = client.delete(f"/api/comments/{root['id']}", headers=owner["headers"])

        assert response.status_code == 200
        assert count_rows(CommentModel) == 0

    def test_like_toggle(self, client, community_setup, create_post) -> None:
        owner, member, community = community_setup
        post = create_post(member, community["id"])
        comment = self._comment(client, owner, post["id"]).json()
        url = f"/api/comments/{comment['id']}/like"

        liked = client.post(url, headers=member["headers"]).json()
        unliked = client.post(url, headers=member["headers"]).json()

        assert liked == {"liked": True, "likeCount": 1}
        assert unliked == {"liked": False, "likeCount": 0}
