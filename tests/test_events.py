"""
Event tests - visibility by type, RSVPs and who may manage events
"""

import pytest

from clubhouse.database import database


def new_event(title: str, event_type: str, date: str = "2030-06-01T19:00:00Z") -> dict:
    return {
        "title": title,
        "date": date,
        "time": "7:00 PM",
        "location": "Clubhouse",
        "description": f"{title} details",
        "type": event_type,
    }


@pytest.fixture()
def calendar(client, roster, admin_headers):
    """One event of each type"""
    events = {}
    for event_type in ("public", "member", "private"):
        response = client.post("/events", json=new_event(f"{event_type} night", event_type), headers=admin_headers)
        assert response.status_code == 201, response.text
        events[event_type] = response.json()
    return events


class TestEventVisibility:
    """Guests see public events, members see everything"""

    def test_guest_sees_only_public(self, client, calendar, guest_headers):
        body = client.get("/events", headers=guest_headers).json()

        assert [event["type"] for event in body["events"]] == ["public"]

    def test_prospect_does_not_see_private(self, client, roster, calendar):
        body = client.get("/events", headers=roster["rookie"]["headers"]).json()

        assert {event["type"] for event in body["events"]} == {"public", "member"}

    def test_member_sees_private(self, client, roster, calendar):
        body = client.get("/events", headers=roster["steel"]["headers"]).json()

        assert body["total"] == 3

    def test_guest_cannot_open_private_event(self, client, calendar, guest_headers):
        response = client.get(f"/events/{calendar['private']['id']}", headers=guest_headers)

        assert response.status_code == 403
        assert response.json()["error"] == "Forbidden"

    def test_unknown_event(self, client, admin_headers):
        response = client.get("/events/nope", headers=admin_headers)

        assert response.status_code == 404

    def test_upcoming_only(self, client, roster, admin_headers, calendar):
        client.post("/events", json=new_event("Old ride", "public", "2020-01-01T10:00:00Z"), headers=admin_headers)

        everything = client.get("/events", headers=admin_headers).json()
        upcoming = client.get("/events", params={"upcoming": "true"}, headers=admin_headers).json()

        assert everything["total"] == 4
        assert upcoming["total"] == 3
        assert "Old ride" not in {event["title"] for event in upcoming["events"]}

    def test_soonest_first(self, client, roster, admin_headers):
        client.post("/events", json=new_event("Later", "public", "2031-01-01T10:00:00Z"), headers=admin_headers)
        client.post("/events", json=new_event("Sooner", "public", "2030-01-01T10:00:00Z"), headers=admin_headers)

        titles = [event["title"] for event in client.get("/events", headers=admin_headers).json()["events"]]
        assert titles == ["Sooner", "Later"]


class TestRsvp:
    """POST/DELETE /events/{id}/rsvp"""

    def test_rsvp_once(self, client, roster, calendar):
        event_id = calendar["public"]["id"]
        headers = roster["steel"]["headers"]

        first = client.post(f"/events/{event_id}/rsvp", headers=headers)
        second = client.post(f"/events/{event_id}/rsvp", headers=headers)

        assert first.status_code == 201
        assert first.json()["road_name"] == "Steel"
        assert second.status_code == 409
        assert second.json() == {"error": "Conflict", "detail": "Already RSVPed to this event"}

        event = client.get(f"/events/{event_id}", headers=headers).json()
        assert event["rsvp_count"] == 1
        assert event["attending"] is True

    def test_storage_constraint_rejects_duplicate(self, client, roster, calendar, monkeypatch):
        """A duplicate that slips past the lookup is still refused by the unique constraint"""
        event_id = calendar["public"]["id"]
        headers = roster["steel"]["headers"]
        assert client.post(f"/events/{event_id}/rsvp", headers=headers).status_code == 201

        fetch_one = database.fetch_one

        async def miss_existing_rsvp(query, values=None):
            if query.strip().startswith("SELECT id FROM event_rsvps"):
                return None
            return await fetch_one(query, values)

        monkeypatch.setattr(database, "fetch_one", miss_existing_rsvp)
        second = client.post(f"/events/{event_id}/rsvp", headers=headers)
        monkeypatch.undo()

        assert second.status_code == 409
        assert second.json()["error"] == "Conflict"
        assert client.get(f"/events/{event_id}", headers=headers).json()["rsvp_count"] == 1

    def test_login_without_profile_cannot_rsvp(self, client, calendar, guest_headers):
        response = client.post(f"/events/{calendar['public']['id']}/rsvp", headers=guest_headers)

        assert response.status_code == 403

    def test_cannot_rsvp_to_invisible_event(self, client, roster, calendar):
        response = client.post(f"/events/{calendar['private']['id']}/rsvp", headers=roster["rookie"]["headers"])

        assert response.status_code == 403

    def test_cancel(self, client, roster, calendar):
        event_id = calendar["member"]["id"]
        headers = roster["rookie"]["headers"]
        client.post(f"/events/{event_id}/rsvp", headers=headers)

        response = client.delete(f"/events/{event_id}/rsvp", headers=headers)

        assert response.status_code == 204
        event = client.get(f"/events/{event_id}", headers=headers).json()
        assert event["rsvp_count"] == 0
        assert event["attending"] is False

    def test_cancel_without_rsvp(self, client, roster, calendar):
        response = client.delete(f"/events/{calendar['public']['id']}/rsvp", headers=roster["thunder"]["headers"])

        assert response.status_code == 404
        assert response.json()["detail"] == "You have not RSVPed to this event"

    def test_cannot_cancel_on_invisible_event(self, client, roster, calendar):
        response = client.delete(f"/events/{calendar['private']['id']}/rsvp", headers=roster["rookie"]["headers"])

        assert response.status_code == 403
        assert response.json()["detail"] == "You do not have access to this event"

    def test_rsvp_shows_on_member_profile(self, client, roster, calendar, admin_headers):
        client.post(f"/events/{calendar['private']['id']}/rsvp", headers=roster["steel"]["headers"])

        profile = client.get(f"/members/{roster['steel']['id']}", headers=roster["rookie"]["headers"]).json()
        assert profile["events"] == []

        profile = client.get(f"/members/{roster['steel']['id']}", headers=admin_headers).json()
        assert [event["title"] for event in profile["events"]] == ["private night"]


class TestRsvpList:
    """Only admins see who is coming"""

    @pytest.fixture()
    def attended(self, client, roster, calendar):
        event_id = calendar["public"]["id"]
        client.post(f"/events/{event_id}/rsvp", headers=roster["steel"]["headers"])
        client.post(f"/events/{event_id}/rsvp", headers=roster["rookie"]["headers"])
        return event_id

    def test_admin_sees_attendees(self, client, admin_headers, attended):
        event = client.get(f"/events/{attended}", headers=admin_headers).json()

        assert event["rsvp_count"] == 2
        assert [rsvp["road_name"] for rsvp in event["rsvps"]] == ["Steel", "Rookie"]

    def test_member_sees_count_only(self, client, roster, attended):
        event = client.get(f"/events/{attended}", headers=roster["thunder"]["headers"]).json()

        assert event["rsvp_count"] == 2
        assert event["rsvps"] is None
        assert event["attending"] is False


class TestEventManagement:
    """Create is open to members; update and delete are admin only"""

    def test_member_can_create(self, client, roster):
        response = client.post("/events", json=new_event("Poker run", "member"), headers=roster["steel"]["headers"])

        assert response.status_code == 201
        assert response.json()["rsvp_count"] == 0

    def test_prospect_cannot_create(self, client, roster):
        response = client.post("/events", json=new_event("Poker run", "member"), headers=roster["rookie"]["headers"])

        assert response.status_code == 403

    def test_guest_cannot_create(self, client, guest_headers):
        response = client.post("/events", json=new_event("Party", "public"), headers=guest_headers)

        assert response.status_code == 403

    def test_invalid_type(self, client, admin_headers):
        response = client.post("/events", json=new_event("Party", "secret"), headers=admin_headers)

        assert response.status_code == 422

    def test_admin_updates(self, client, calendar, admin_headers):
        response = client.put(
            f"/events/{calendar['member']['id']}",
            json={"location": "Main Street Parking", "type": "public"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["location"] == "Main Street Parking"
        assert body["type"] == "public"
        assert body["title"] == "member night"

    def test_member_cannot_update(self, client, roster, calendar):
        response = client.put(
            f"/events/{calendar['member']['id']}",
            json={"title": "Renamed"},
            headers=roster["steel"]["headers"],
        )

        assert response.status_code == 403

    def test_admin_deletes_with_rsvps(self, client, roster, calendar, admin_headers):
        event_id = calendar["public"]["id"]
        client.post(f"/events/{event_id}/rsvp", headers=roster["steel"]["headers"])

        assert client.delete(f"/events/{event_id}", headers=admin_headers).status_code == 204
        assert client.get(f"/events/{event_id}", headers=admin_headers).status_code == 404

    def test_member_cannot_delete(self, client, roster, calendar):
        response = client.delete(f"/events/{calendar['public']['id']}", headers=roster["steel"]["headers"])

        assert response.status_code == 403
