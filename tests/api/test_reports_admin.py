"""
API tests for moderation reports and the admin console.

System role: Verification of report filing and admin moderation
"""

import pytest

from explorely.boundary.db.models import CommunityModel, PostModel, UserModel

DEFAULT_PASSWORD = "Passw0rdOK"


@pytest.fixture
def moderation_setup(client, register, create_community, create_post):
    """Admin, a poster with one post, and a reporter."""
    admin = register("admin_one", admin=True)
    poster = register("poster_one")
    reporter = register("reporter1")
    community = create_community(poster)
    post = create_post(poster, community["id"])
    return admin, poster, reporter, community, post


def _report(client, account, reported_type, item_id, reason="Spam"):
    return client.post(
        "/api/reports",
        json={"reportedType": reported_type, "reportedItemId": str(item_id), "reason": reason},
        headers=account["headers"],
    )


class TestReports:
    def test_file_report_counts_against_item(self, client, moderation_setup) -> None:
        admin, poster, reporter, community, post = moderation_setup

        response = _report(client, reporter, "post", post["id"])

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "pending"
        assert body["reportedItemId"] == post["id"]
        listing = client.get("/api/admin/posts", headers=admin["headers"]).json()
        assert listing["items"][0]["reportCount"] == 1
        assert listing["items"][0]["reports"] == ["Spam"]

    def test_duplicate_pending_report_conflicts(self, client, moderation_setup) -> None:
        admin, poster, reporter, community, post = moderation_setup
        _report(client, reporter, "post", post["id"])

        response = _report(client, reporter, "post", post["id"], reason="Misinformation")

        assert response.status_code == 409
        assert response.json()["message"] == "You have already reported this item"

    def test_missing_item_and_self_report(self, client, moderation_setup) -> None:
        admin, poster, reporter, community, post = moderation_setup

        missing = _report(client, reporter, "review", "00000000-0000-0000-0000-000000000001")
        self_report = _report(client, reporter, "user", reporter["id"])

        assert missing.status_code == 404
        assert missing.json()["message"] == "Reported item not found"
        assert self_report.status_code == 400

    def test_unknown_reason_is_rejected(self, client, moderation_setup) -> None:
        admin, poster, reporter, community, post = moderation_setup

        response = _report(client, reporter, "post", post["id"], reason="Boring")

        assert response.status_code == 400

    def test_own_reports(self, client, moderation_setup) -> None:
        admin, poster, reporter, community, post = moderation_setup
        _report(client, reporter, "community", community["id"])

        mine = client.get("/api/reports/user", headers=reporter["headers"]).json()
        theirs = client.get("/api/reports/user", headers=poster["headers"]).json()

        assert [r["reportedType"] for r in mine] == ["community"]
        assert theirs == []


class TestAdminAccess:
    def test_requires_authentication(self, client) -> None:
        response = client.get("/api/admin/stats")

        assert response.status_code == 401

    def test_requires_admin(self, client, register) -> None:
        member = register("member_one")

        response = client.get("/api/admin/stats", headers=member["headers"])

        assert response.status_code == 403
        assert response.json()["message"] == "Access denied. Admin privileges required."

    def test_stats(self, client, moderation_setup) -> None:
        admin, poster, reporter, community, post = moderation_setup
        _report(client, reporter, "post", post["id"])

        body = client.get("/api/admin/stats", headers=admin["headers"]).json()

        assert body["totals"]["users"] == 3
        assert body["totals"]["posts"] == 1
        assert body["last30Days"]["communities"] == 1
        assert body["pendingReports"] == 1
        assert body["bannedUsers"] == 0
        assert [c["name"] for c in body["topCommunities"]] == ["Backpackers"]


class TestAdminUsers:
    def test_listing_and_search(self, client, moderation_setup) -> None:
        admin, poster, reporter, community, post = moderation_setup

        everyone = client.get("/api/admin/users", headers=admin["headers"]).json()
        searched = client.get(
            "/api/admin/users", params={"search": "poster"}, headers=admin["headers"]
        ).json()
        bad_filter = client.get(
            "/api/admin/users", params={"filter": "weird"}, headers=admin["headers"]
        )

        assert everyone["total"] == 3
        assert [u["username"] for u in searched["items"]] == ["poster_one"]
        assert bad_filter.status_code == 400

    def test_reported_filter(self, client, moderation_setup) -> None:
        admin, poster, reporter, community, post = moderation_setup
        _report(client, reporter, "user", poster["id"], reason="Harassment or bullying")

        reported = client.get(
            "/api/admin/users", params={"filter": "reported"}, headers=admin["headers"]
        ).json()

        assert [u["username"] for u in reported["items"]] == ["poster_one"]
        assert reported["items"][0]["reports"] == ["Harassment or bullying"]

    def test_ban_locks_account_out(self, client, moderation_setup) -> None:
        admin, poster, reporter, community, post = moderation_setup

        banned = client.put(f"/api/admin/users/{poster['id']}/ban", headers=admin["headers"])
        login = client.post(
            "/auth/login",
            json={"email": "poster_one@example.com", "password": DEFAULT_PASSWORD},
        )
        old_token = client.get("/auth/protected", headers=poster["headers"])
        banned_list = client.get("/api/admin/users/banned", headers=admin["headers"]).json()
        active_list = client.get("/api/admin/users/active", headers=admin["headers"]).json()

        assert banned.json()["message"] == "User banned successfully"
        assert login.status_code == 403
        assert login.json()["message"] == "Your account has been banned"
        assert old_token.status_code in (401, 403)
        assert [u["username"] for u in banned_list["items"]] == ["poster_one"]
        assert "poster_one" not in [u["username"] for u in active_list["items"]]

        unbanned = client.put(f"/api/admin/users/{poster['id']}/unban", headers=admin["headers"])
        assert unbanned.json()["message"] == "User unbanned successfully"
        relogin = client.post(
            "/auth/login",
            json={"email": "poster_one", "password": DEFAULT_PASSWORD},
        )
        assert relogin.status_code == 200

    def test_admin_cannot_ban_self(self, client, moderation_setup) -> None:
        admin = moderation_setup[0]

        response = client.put(f"/api/admin/users/{admin['id']}/ban", headers=admin["headers"])

        assert response.status_code == 400
        assert response.json()["message"] == "You cannot ban yourself"

    def test_delete_user_cascades(self, client, moderation_setup, count_rows) -> None:
        admin, poster, reporter, community, post = moderation_setup

        response = client.delete(f"/api/admin/users/{poster['id']}", headers=admin["headers"])

        assert response.status_code == 200
        removed = response.json()["removed"]
        assert removed["users"] == 1
        assert removed["communities"] == 1
        assert removed["posts"] == 1
        assert count_rows(UserModel, UserModel.id == poster["id"]) == 0
        assert count_rows(CommunityModel) == 0

    def test_delete_user_recounts_counters_they_fed(
        self, client, moderation_setup, count_rows
    ) -> None:
        admin, poster, reporter, community, post = moderation_setup
        client.post(f"/api/posts/{post['id']}/upvote", headers=reporter["headers"])
        _report(client, reporter, "post", post["id"])
        assert count_rows(UserModel, UserModel.id == poster["id"], UserModel.karma_post == 1) == 1

        response = client.delete(f"/api/admin/users/{reporter['id']}", headers=admin["headers"])

        assert response.status_code == 200
        assert response.json()["removed"]["post_votes"] == 1
        assert response.json()["removed"]["reports"] == 1
        shown = client.get(f"/api/posts/{post['id']}", headers=admin["headers"]).json()
        assert shown["voteCount"] == 0
        reported = client.get(
            "/api/admin/posts", params={"filter": "reported"}, headers=admin["headers"]
        ).json()
        assert reported["items"] == []
        assert count_rows(UserModel, UserModel.id == poster["id"], UserModel.karma_post == 0) == 1


class TestAdminReports:
    def test_status_workflow(self, client, moderation_setup) -> None:
        admin, poster, reporter, community, post = moderation_setup
        report = _report(client, reporter, "post", post["id"]).json()
        url = f"/api/admin/reports/{report['id']}/status"

        reviewed = client.patch(
            url, json={"status": "reviewed", "adminNotes": "Looking"}, headers=admin["headers"]
        )
        resolved = client.patch(url, json={"status": "resolved"}, headers=admin["headers"])
        reopened = client.patch(url, json={"status": "pending"}, headers=admin["headers"])

        assert reviewed.status_code == 200
        assert reviewed.json()["adminNotes"] == "Looking"
        assert reviewed.json()["resolvedById"] == str(admin["id"])
        assert resolved.json()["status"] == "resolved"
        assert resolved.json()["resolvedAt"] is not None
        assert reopened.status_code == 400

    def test_dismiss_releases_report_count(self, client, moderation_setup) -> None:
        admin, poster, reporter, community, post = moderation_setup
        report = _report(client, reporter, "post", post["id"]).json()

        client.patch(
            f"/api/admin/reports/{report['id']}/status",
            json={"status": "dismissed"},
            headers=admin["headers"],
        )

        listing = client.get("/api/admin/posts", headers=admin["headers"]).json()
        assert listing["items"][0]["reportCount"] == 0

    def test_notes_filters_and_stats(self, client, moderation_setup) -> None:
        admin, poster, reporter, community, post = moderation_setup
        report = _report(client, reporter, "post", post["id"]).json()
        _report(client, reporter, "community", community["id"], reason="Misinformation")

        notes = client.patch(
            f"/api/admin/reports/{report['id']}/notes",
            json={"adminNotes": "Duplicate of earlier"},
            headers=admin["headers"],
        )
        posts_only = client.get(
            "/api/admin/reports", params={"type": "post"}, headers=admin["headers"]
        ).json()
        for_item = client.get(
            f"/api/admin/reports/item/post/{post['id']}", headers=admin["headers"]
        ).json()
        stats = client.get("/api/admin/reports/stats", headers=admin["headers"]).json()

        assert notes.json()["adminNotes"] == "Duplicate of earlier"
        assert notes.json()["status"] == "pending"
        assert posts_only["total"] == 1
        assert [r["id"] for r in for_item] == [report["id"]]
        assert stats["total"] == 2
        assert stats["byStatus"] == {"pending": 2}
        assert stats["byReason"] == {"Spam": 1, "Misinformation": 1}
        assert stats["byType"] == {"post": 1, "community": 1}

    def test_unknown_report(self, client, moderation_setup) -> None:
        admin = moderation_setup[0]

        response = client.patch(
            "/api/admin/reports/00000000-0000-0000-0000-000000000001/notes",
            json={"adminNotes": "x"},
            headers=admin["headers"],
        )

        assert response.status_code == 404


class TestAdminContent:
    def test_delete_post(self, client, moderation_setup, count_rows) -> None:
        admin, poster, reporter, community, post = moderation_setup

        response = client.delete(f"/api/admin/posts/{post['id']}", headers=admin["headers"])
        missing = client.delete(f"/api/admin/posts/{post['id']}", headers=admin["headers"])

        assert response.json()["removed"]["posts"] == 1
        assert count_rows(PostModel) == 0
        assert missing.status_code == 404

    def test_listings_paginate(self, client, moderation_setup, create_community) -> None:
        admin, poster, reporter, community, post = moderation_setup
        create_community(poster, name="Hikers")

        page = client.get(
            "/api/admin/communities", params={"limit": 1}, headers=admin["headers"]
        ).json()

        assert page["total"] == 2
        assert page["totalPages"] == 2
        assert page["hasMore"] is True
        assert len(page["items"]) == 1
