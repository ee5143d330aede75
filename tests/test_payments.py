"""
Dues ledger tests - ownership narrowing, paid-date stamping and totals
"""

from datetime import datetime, timedelta, timezone

import pytest


def parse_utc(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@pytest.fixture()
def ledger(client, roster, admin_headers):
    """Two payments for Steel, one for Thunder, one overdue for Rookie"""

    def add(member, **fields):
        response = client.post(
            "/payments",
            json={"member_id": roster[member]["id"], "due_date": "2024-12-01", **fields},
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return {
        "steel_paid": add("steel", amount=50, status="paid", paid_date="2024-11-28T00:00:00Z"),
        "steel_pending": add("steel", amount=50, due_date="2025-01-01"),
        "thunder_pending": add("thunder", amount=50),
        "rookie_overdue": add("rookie", amount=30, status="overdue"),
    }


class TestPaymentVisibility:
    """Non-admins never see another member's payments"""

    def test_admin_sees_all(self, client, ledger, admin_headers):
        body = client.get("/payments", headers=admin_headers).json()

        assert body["total"] == 4

    @pytest.mark.parametrize("who,expected", [("steel", 2), ("thunder", 1), ("rookie", 1)])
    def test_member_sees_only_own(self, client, roster, ledger, who, expected):
        body = client.get("/payments", headers=roster[who]["headers"]).json()

        assert body["total"] == expected
        assert {payment["member_id"] for payment in body["payments"]} == {roster[who]["id"]}

    def test_guest_without_profile_sees_nothing(self, client, ledger, guest_headers):
        response = client.get("/payments", headers=guest_headers)

        assert response.status_code == 200
        assert response.json() == {"total": 0, "payments": []}

    def test_status_filter_keeps_narrowing(self, client, roster, ledger):
        body = client.get("/payments", params={"status": "pending"}, headers=roster["steel"]["headers"]).json()

        assert [payment["id"] for payment in body["payments"]] == [ledger["steel_pending"]["id"]]

    def test_get_own_payment(self, client, roster, ledger):
        response = client.get(f"/payments/{ledger['steel_paid']['id']}", headers=roster["steel"]["headers"])

        assert response.status_code == 200
        assert response.json()["member"]["road_name"] == "Steel"

    def test_get_someone_elses_payment(self, client, roster, ledger):
        response = client.get(f"/payments/{ledger['thunder_pending']['id']}", headers=roster["steel"]["headers"])

        assert response.status_code == 403
        assert response.json()["error"] == "Forbidden"

    def test_guest_gets_same_answer_for_any_payment_id(self, client, ledger, guest_headers):
        existing = client.get(f"/payments/{ledger['steel_paid']['id']}", headers=guest_headers)
        missing = client.get("/payments/nope", headers=guest_headers)

        assert existing.status_code == missing.status_code == 403
        assert existing.json() == missing.json()

    def test_unknown_payment(self, client, admin_headers):
        response = client.get("/payments/nope", headers=admin_headers)

        assert response.status_code == 404


class TestPaidDate:
    """Entering 'paid' without a paid date records the current time"""

    def test_create_paid_without_date_is_stamped(self, client, roster, admin_headers):
        before = datetime.now(timezone.utc) - timedelta(seconds=1)
        response = client.post(
            "/payments",
            json={"member_id": roster["steel"]["id"], "amount": 50, "due_date": "2024-12-01", "status": "paid"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert parse_utc(response.json()["paid_date"]) >= before

    def test_create_paid_with_explicit_date_is_kept(self, client, ledger):
        assert parse_utc(ledger["steel_paid"]["paid_date"]) == datetime(2024, 11, 28, tzinfo=timezone.utc)

    def test_pending_has_no_paid_date(self, client, ledger):
        assert ledger["steel_pending"]["paid_date"] is None

    def test_mark_paid_stamps_now(self, client, ledger, admin_headers):
        before = datetime.now(timezone.utc) - timedelta(seconds=1)
        response = client.put(
            f"/payments/{ledger['thunder_pending']['id']}",
            json={"status": "paid"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "paid"
        assert parse_utc(body["paid_date"]) >= before

    def test_mark_paid_with_explicit_date(self, client, ledger, admin_headers):
        response = client.put(
            f"/payments/{ledger['thunder_pending']['id']}",
            json={"status": "paid", "paid_date": "2024-12-03T12:00:00+00:00"},
            headers=admin_headers,
        )

        assert parse_utc(response.json()["paid_date"]) == datetime(2024, 12, 3, 12, tzinfo=timezone.utc)

    def test_already_paid_keeps_its_date(self, client, ledger, admin_headers):
        response = client.put(
            f"/payments/{ledger['steel_paid']['id']}",
            json={"status": "paid", "notes": "Late fee waived"},
            headers=admin_headers,
        )

        body = response.json()
        assert parse_utc(body["paid_date"]) == datetime(2024, 11, 28, tzinfo=timezone.utc)
        assert body["notes"] == "Late fee waived"


class TestPaymentWrites:
    """Only admins change the ledger"""

    def test_member_cannot_create(self, client, roster):
        response = client.post(
            "/payments",
            json={"member_id": roster["steel"]["id"], "amount": 50, "due_date": "2024-12-01"},
            headers=roster["steel"]["headers"],
        )

        assert response.status_code == 403

    def test_member_cannot_mark_own_payment_paid(self, client, roster, ledger):
        response = client.put(
            f"/payments/{ledger['steel_pending']['id']}",
            json={"status": "paid"},
            headers=roster["steel"]["headers"],
        )

        assert response.status_code == 403

    def test_unknown_member(self, client, admin_headers):
        response = client.post(
            "/payments",
            json={"member_id": "nobody", "amount": 50, "due_date": "2024-12-01"},
            headers=admin_headers,
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Member not found"

    @pytest.mark.parametrize("bad", [
        {"amount": 0},
        {"amount": -5},
        {"status": "refunded"},
        {"due_date": "not-a-date"},
    ])
    def test_invalid_fields(self, client, roster, admin_headers, bad):
        payload = {"member_id": roster["steel"]["id"], "amount": 50, "due_date": "2024-12-01", **bad}
        response = client.post("/payments", json=payload, headers=admin_headers)

        assert response.status_code == 422
        assert response.json()["error"] == "ValidationError"

    def test_delete(self, client, ledger, admin_headers):
        response = client.delete(f"/payments/{ledger['rookie_overdue']['id']}", headers=admin_headers)

        assert response.status_code == 204
        assert client.get("/payments", headers=admin_headers).json()["total"] == 3

    def test_member_cannot_delete(self, client, roster, ledger):
        response = client.delete(f"/payments/{ledger['steel_pending']['id']}", headers=roster["steel"]["headers"])

        assert response.status_code == 403


class TestPaymentSummary:
    """GET /payments/summary totals only what the caller can see"""

    def test_admin_totals(self, client, ledger, admin_headers):
        body = client.get("/payments/summary", headers=admin_headers).json()

        assert body["total_collected"] == 50
        assert body["total_outstanding"] == 130
        assert body["total_overdue"] == 30
        assert (body["paid_count"], body["pending_count"], body["overdue_count"]) == (1, 2, 1)

    def test_member_totals(self, client, roster, ledger):
        body = client.get("/payments/summary", headers=roster["steel"]["headers"]).json()

        assert body["total_collected"] == 50
        assert body["total_outstanding"] == 50
        assert body["overdue_count"] == 0

    def test_guest_totals(self, client, ledger, guest_headers):
        body = client.get("/payments/summary", headers=guest_headers).json()

        assert body["total_collected"] == 0
        assert body["paid_count"] == 0
