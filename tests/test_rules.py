"""
Bylaw and user-account tests
"""

import pytest


@pytest.fixture()
def bylaws(client, admin_headers):
    created = []
    for title, category, order in [
        ("Club Colors", "conduct", 4),
        ("Respect and Brotherhood", "general", 1),
        ("Riding Formation", "riding", 3),
        ("Meeting Attendance", "meetings", 2),
    ]:
        response = client.post(
            "/rules",
            json={"title": title, "description": f"{title} applies to everyone.", "category": category, "order": order},
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text
        created.append(response.json())
    return created


class TestRules:
    """Every role reads the bylaws, only admins edit them"""

    @pytest.mark.parametrize("headers_fixture", ["guest_headers", "hangaround_headers"])
    def test_any_role_reads_in_order(self, client, bylaws, request, headers_fixture):
        headers = request.getfixturevalue(headers_fixture)
        body = client.get("/rules", headers=headers).json()

        assert body["total"] == 4
        assert [rule["order"] for rule in body["rules"]] == [1, 2, 3, 4]
        assert body["rules"][0]["title"] == "Respect and Brotherhood"

    def test_category_filter(self, client, bylaws, admin_headers):
        body = client.get("/rules", params={"category": "riding"}, headers=admin_headers).json()

        assert [rule["title"] for rule in body["rules"]] == ["Riding Formation"]

    def test_get_one(self, client, bylaws, guest_headers):
        response = client.get(f"/rules/{bylaws[0]['id']}", headers=guest_headers)

        assert response.status_code == 200
        assert response.json()["category"] == "conduct"

    def test_admin_edits(self, client, bylaws, admin_headers):
        response = client.put(f"/rules/{bylaws[0]['id']}", json={"order": 0}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["order"] == 0
        first = client.get("/rules", headers=admin_headers).json()["rules"][0]
        assert first["title"] == "Club Colors"

    def test_member_cannot_edit(self, client, roster, bylaws):
        response = client.put(
            f"/rules/{bylaws[0]['id']}",
            json={"title": "No colors"},
            headers=roster["steel"]["headers"],
        )

        assert response.status_code == 403

    def test_member_cannot_create(self, client, roster):
        response = client.post(
            "/rules",
            json={"title": "New rule", "description": "Something"},
            headers=roster["steel"]["headers"],
        )

        assert response.status_code == 403

    def test_negative_order_rejected(self, client, admin_headers):
        response = client.post(
            "/rules",
            json={"title": "Bad", "description": "Bad order", "order": -1},
            headers=admin_headers,
        )

        assert response.status_code == 422

    def test_admin_deletes(self, client, bylaws, admin_headers):
        assert client.delete(f"/rules/{bylaws[1]['id']}", headers=admin_headers).status_code == 204
        assert client.get(f"/rules/{bylaws[1]['id']}", headers=admin_headers).status_code == 404


class TestUsers:
    """Logins without a member profile"""

    def test_admin_lists_users(self, client, roster, guest_headers, admin_headers):
        body = client.get("/users", headers=admin_headers).json()

        usernames = {user["username"]: user for user in body["users"]}
        assert set(usernames) == {"admin", "john_steel", "mike_thunder", "jake_rookie", "visitor"}
        assert usernames["visitor"]["member_id"] is None
        assert usernames["john_steel"]["member_id"] == roster["steel"]["id"]
        assert all("password_hash" not in user for user in body["users"])

    def test_member_cannot_list_users(self, client, roster):
        assert client.get("/users", headers=roster["steel"]["headers"]).status_code == 403

    def test_duplicate_username(self, client, guest_headers, admin_headers):
        response = client.post(
            "/users",
            json={"username": "visitor", "password": "another-pass", "role": "guest"},
            headers=admin_headers,
        )

        assert response.status_code == 409

    def test_new_guest_can_log_in(self, client, guest_headers):
        response = client.post("/auth/login", json={"username": "visitor", "password": "visitor-pass"})

        assert response.status_code == 200
        assert response.json()["role"] == "guest"
        assert response.json()["member_id"] is None
