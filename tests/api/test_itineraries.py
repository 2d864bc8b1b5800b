"""
API tests for community and personal itineraries.

System role: Verification of the itinerary contracts
"""

from datetime import datetime, timedelta, timezone

import pytest

from explorely.boundary.db.models import NotificationModel, NotificationType


def _plan(**overrides) -> dict:
    start = datetime.now(timezone.utc) + timedelta(days=10)
    return {
        "title": "Kyoto in autumn",
        "destination": "Kyoto",
        "startDate": start.isoformat(),
        "endDate": (start + timedelta(days=5)).isoformat(),
        "travelers": 2,
        "activities": [{"name": "Fushimi Inari", "time": "08:00"}],
        **overrides,
    }


@pytest.fixture
def itinerary_setup(client, register, create_community):
    """Community with an owner and a joined member."""
    owner = register("owner_one")
    member = register("member_one")
    community = create_community(owner)
    client.post(f"/api/communities/{community['id']}/join", headers=member["headers"])
    return owner, member, community


class TestCommunityItineraries:
    def test_member_shares_itinerary_and_members_are_notified(
        self, client, itinerary_setup, count_rows
    ) -> None:
        owner, member, community = itinerary_setup

        response = client.post(
            f"/api/itineraries/community/{community['id']}",
            json=_plan(),
            headers=member["headers"],
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "planning"
        assert body["author"]["username"] == "member_one"
        assert body["activities"] == [{"name": "Fushimi Inari", "time": "08:00"}]
        assert (
            count_rows(
                NotificationModel,
                NotificationModel.type == NotificationType.COMMUNITY_ITINERARY,
                NotificationModel.recipient_id == owner["id"],
            )
            == 1
        )

    def test_non_member_cannot_share(self, client, register, itinerary_setup) -> None:
        owner, member, community = itinerary_setup
        outsider = register("outsider1")

        response = client.post(
            f"/api/itineraries/community/{community['id']}",
            json=_plan(),
            headers=outsider["headers"],
        )

        assert response.status_code == 403

    def test_end_before_start_is_rejected(self, client, itinerary_setup) -> None:
        owner, member, community = itinerary_setup
        start = datetime.now(timezone.utc) + timedelta(days=10)

        response = client.post(
            f"/api/itineraries/community/{community['id']}",
            json=_plan(
                startDate=start.isoformat(), endDate=(start - timedelta(days=1)).isoformat()
            ),
            headers=member["headers"],
        )

        assert response.status_code == 400
        assert response.json()["message"] == "End date cannot be before start date"

    def test_past_plan_is_stored_completed(self, client, itinerary_setup) -> None:
        owner, member, community = itinerary_setup
        start = datetime.now(timezone.utc) - timedelta(days=30)

        response = client.post(
            f"/api/itineraries/community/{community['id']}",
            json=_plan(
                startDate=start.isoformat(),
                endDate=(start + timedelta(days=3)).isoformat(),
                status="upcoming",
            ),
            headers=member["headers"],
        )

        assert response.json()["status"] == "completed"

    def test_join_and_leave(self, client, itinerary_setup) -> None:
        owner, member, community = itinerary_setup
        itinerary = client.post(
            f"/api/itineraries/community/{community['id']}",
            json=_plan(),
            headers=member["headers"],
        ).json()
        base = f"/api/itineraries/{itinerary['id']}"

        joined = client.post(f"{base}/join", headers=owner["headers"])
        again = client.post(f"{base}/join", headers=owner["headers"])
        left = client.post(f"{base}/leave", headers=owner["headers"])
        left_again = client.post(f"{base}/leave", headers=owner["headers"])

        assert joined.json()["participantCount"] == 1
        assert joined.json()["isJoined"] is True
        assert again.status_code == 409
        assert left.json()["participantCount"] == 0
        assert left_again.status_code == 400

    def test_author_manages_activities(self, client, itinerary_setup) -> None:
        owner, member, community = itinerary_setup
        itinerary = client.post(
            f"/api/itineraries/community/{community['id']}",
            json=_plan(),
            headers=member["headers"],
        ).json()
        base = f"/api/itineraries/{itinerary['id']}"

        added = client.post(
            f"{base}/activities", json={"name": "Tea ceremony"}, headers=member["headers"]
        )
        denied = client.post(
            f"{base}/activities", json={"name": "Crash"}, headers=owner["headers"]
        )
        removed = client.delete(f"{base}/activities/0", headers=member["headers"])
        out_of_range = client.delete(f"{base}/activities/5", headers=member["headers"])

        assert [a["name"] for a in added.json()["activities"]] == [
            "Fushimi Inari",
            "Tea ceremony",
        ]
        assert denied.status_code == 403
        assert [a["name"] for a in removed.json()["activities"]] == ["Tea ceremony"]
        assert out_of_range.status_code == 404

    def test_list_and_delete(self, client, itinerary_setup) -> None:
        owner, member, community = itinerary_setup
        itinerary = client.post(
            f"/api/itineraries/community/{community['id']}",
            json=_plan(),
            headers=member["headers"],
        ).json()

        listing = client.get(f"/api/itineraries/community/{community['id']}").json()
        deleted = client.delete(f"/api/itineraries/{itinerary['id']}", headers=member["headers"])

        assert [i["id"] for i in listing] == [itinerary["id"]]
        assert deleted.status_code == 200
        assert client.get(f"/api/itineraries/{itinerary['id']}").status_code == 404


class TestUserItineraries:
    def test_crud_is_private_to_owner(self, client, register) -> None:
        traveler = register("traveler1")
        stranger = register("stranger1")

        created = client.post(
            "/api/user-itineraries", json=_plan(), headers=traveler["headers"]
        ).json()
        url = f"/api/user-itineraries/{created['id']}"

        assert client.get(url, headers=traveler["headers"]).status_code == 200
        assert client.get(url, headers=stranger["headers"]).status_code == 404
        assert client.get("/api/user-itineraries", headers=stranger["headers"]).json() == []

        updated = client.put(url, json={"progress": 40}, headers=traveler["headers"]).json()
        assert updated["progress"] == 40
        assert updated["title"] == "Kyoto in autumn"

        assert client.delete(url, headers=traveler["headers"]).status_code == 200
        assert client.get(url, headers=traveler["headers"]).status_code == 404

    def test_section_entries(self, client, register) -> None:
        traveler = register("traveler1")
        created = client.post(
            "/api/user-itineraries", json=_plan(activities=[]), headers=traveler["headers"]
        ).json()
        base = f"/api/user-itineraries/{created['id']}"

        added = client.post(
            f"{base}/restaurants",
            json={"name": "Ippudo", "priceRange": "$$"},
            headers=traveler["headers"],
        )
        replaced = client.put(
            f"{base}/restaurants/0",
            json={"name": "Ichiran", "cuisine": "Ramen"},
            headers=traveler["headers"],
        )
        unknown = client.post(
            f"{base}/flights", json={"name": "NH 123"}, headers=traveler["headers"]
        )
        malformed = client.post(
            f"{base}/accommodations", json={"price": 10}, headers=traveler["headers"]
        )
        removed = client.delete(f"{base}/restaurants/0", headers=traveler["headers"])

        assert added.json()["restaurants"] == [{"name": "Ippudo", "priceRange": "$$"}]
        assert replaced.json()["restaurants"] == [{"name": "Ichiran", "cuisine": "Ramen"}]
        assert unknown.status_code == 400
        assert malformed.status_code == 400
        assert removed.json()["restaurants"] == []

    def test_update_rejects_inverted_dates(self, client, register) -> None:
        traveler = register("traveler1")
        created = client.post(
            "/api/user-itineraries", json=_plan(), headers=traveler["headers"]
        ).json()
        before_start = datetime.now(timezone.utc) + timedelta(days=1)

        response = client.put(
            f"/api/user-itineraries/{created['id']}",
            json={"endDate": before_start.isoformat()},
            headers=traveler["headers"],
        )

        assert response.status_code == 400
