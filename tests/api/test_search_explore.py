"""
API tests for site search and the explore page.

System role: Verification of post and community discovery
"""

from datetime import timedelta
from uuid import UUID

import pytest
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from explorely.boundary.db.base import utc_now
from explorely.boundary.db.models import PostModel


async def _age_post(session: AsyncSession, post_id: str, days: int) -> None:
    await session.execute(
        update(PostModel)
        .where(PostModel.id == UUID(post_id))
        .values(created_at=utc_now() - timedelta(days=days))
    )


@pytest.fixture
def discovery_setup(client, register, create_community, create_post):
    """Two public communities with posts, one private community, and a voter."""
    owner = register("owner_one")
    voter = register("voter_one")
    beaches = create_community(owner, "Beach Lovers", description="Sand and sun")
    hikers = create_community(owner, "Mountain Hikers", description="Trails near beaches")
    hidden = create_community(owner, "Secret Coves", description="Beaches", isPrivate=True)
    client.post(f"/api/communities/{hikers['id']}/join", headers=voter["headers"])

    beach_post = create_post(owner, beaches["id"], title="Hidden beaches of Crete")
    trail_post = create_post(owner, hikers["id"], title="Ridge walk")
    private_post = create_post(owner, hidden["id"], title="Beaches nobody knows")
    return {
        "owner": owner,
        "voter": voter,
        "beaches": beaches,
        "hikers": hikers,
        "hidden": hidden,
        "beach_post": beach_post,
        "trail_post": trail_post,
        "private_post": private_post,
    }


class TestSearch:
    @pytest.mark.parametrize("query", ["", "   "])
    def test_blank_query_is_400(self, client, query) -> None:
        response = client.get("/api/search", params={"query": query})

        assert response.status_code == 400
        assert response.json()["message"] == "Search query is required"

    def test_missing_query_is_400(self, client) -> None:
        response = client.get("/api/search")

        assert response.status_code == 400
        assert response.json()["message"] == "Search query is required"

    def test_unknown_type_is_400(self, client) -> None:
        response = client.get("/api/search", params={"query": "beach", "type": "users"})

        assert response.status_code == 400

    def test_finds_posts_and_communities(self, client, discovery_setup) -> None:
        s = discovery_setup
        client.post(
            f"/api/comments/post/{s['beach_post']['id']}",
            json={"content": "Balos lagoon!"},
            headers=s["owner"]["headers"],
        )

        response = client.get("/api/search", params={"query": "BEACH"})

        assert response.status_code == 200
        body = response.json()
        assert body["query"] == "BEACH"
        assert body["type"] == "all"
        posts = body["results"]["posts"]
        assert [p["id"] for p in posts] == [s["beach_post"]["id"]]
        assert posts[0]["commentCount"] == 1
        assert posts[0]["community"]["name"] == "Beach Lovers"

    def test_private_community_posts_are_not_searchable(self, client, discovery_setup) -> None:
        s = discovery_setup

        body = client.get("/api/search", params={"query": "nobody knows"}).json()

        assert s["private_post"]["title"] == "Beaches nobody knows"
        assert body["results"]["posts"] == []

    def test_name_matches_rank_ahead_of_description_matches(
        self, client, discovery_setup
    ) -> None:
        s = discovery_setup

        body = client.get(
            "/api/search", params={"query": "beach", "type": "communities"}
        ).json()

        communities = body["results"]["communities"]
        assert body["type"] == "communities"
        assert body["results"]["posts"] == []
        assert communities[0]["id"] == s["beaches"]["id"]
        assert {c["id"] for c in communities} == {
            s["beaches"]["id"],
            s["hikers"]["id"],
            s["hidden"]["id"],
        }
        hikers = next(c for c in communities if c["id"] == s["hikers"]["id"])
        assert hikers["memberCount"] == 2
        assert hikers["postCount"] == 1

    def test_type_is_case_insensitive(self, client, discovery_setup) -> None:
        body = client.get("/api/search", params={"query": "ridge", "type": "POSTS"}).json()

        assert body["type"] == "posts"
        assert [p["title"] for p in body["results"]["posts"]] == ["Ridge walk"]
        assert body["results"]["communities"] == []

    def test_like_wildcards_match_literally(self, client, discovery_setup) -> None:
        body = client.get("/api/search", params={"query": "%"}).json()

        assert body["results"]["posts"] == []
        assert body["results"]["communities"] == []

    def test_search_reports_callers_vote(self, client, discovery_setup) -> None:
        s = discovery_setup
        client.post(f"/api/posts/{s['trail_post']['id']}/upvote", headers=s["voter"]["headers"])

        body = client.get(
            "/api/search", params={"query": "ridge"}, headers=s["voter"]["headers"]
        ).json()

        assert body["results"]["posts"][0]["userVote"] == 1
        assert body["results"]["posts"][0]["voteCount"] == 1


class TestExplore:
    def test_explore_is_public_and_empty_without_content(self, client) -> None:
        response = client.get("/api/explore")

        assert response.status_code == 200
        assert response.json() == {"trendingCommunities": [], "trendingPosts": []}

    def test_trending_communities_ranked_by_members(self, client, discovery_setup) -> None:
        s = discovery_setup

        body = client.get("/api/explore").json()

        communities = body["trendingCommunities"]
        assert communities[0]["id"] == s["hikers"]["id"]
        assert communities[0]["memberCount"] == 2
        assert communities[0]["postCount"] == 1
        assert len(communities) == 3

    def test_trending_posts_are_recent_public_and_vote_ranked(
        self, client, discovery_setup, run_in_db
    ) -> None:
        s = discovery_setup
        client.post(f"/api/posts/{s['trail_post']['id']}/upvote", headers=s["voter"]["headers"])
        client.post(f"/api/posts/{s['beach_post']['id']}/downvote", headers=s["voter"]["headers"])
        stale = client.post(
            "/api/posts",
            json={"title": "Old news", "content": "Last week", "communityId": s["beaches"]["id"]},
            headers=s["owner"]["headers"],
        ).json()
        run_in_db(_age_post, stale["id"], 2)

        body = client.get("/api/explore").json()

        posts = body["trendingPosts"]
        assert [p["id"] for p in posts] == [s["trail_post"]["id"], s["beach_post"]["id"]]
        assert posts[0]["upvotes"] == 1
        assert posts[0]["downvotes"] == 0
        assert posts[1]["downvotes"] == 1
        assert posts[1]["voteCount"] == -1
