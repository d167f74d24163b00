# backend/tests/routes/test_connection_routes.py
"""
Route tests for /api/connections.
"""


class TestConnections:
    def test_list_requires_auth(self, client):
        assert client.get("/api/connections").status_code == 401

    def test_create_and_list(self, client, auth_headers, make_profile):
        alice = make_profile("u1", name="Alice")
        headers = auth_headers("u2")

        created = client.post(
            "/api/connections",
            json={"toUserId": "u1", "toProfileId": alice.id, "scanMethod": "qr", "notes": "hi"},
            headers=headers,
        )
        listed = client.get("/api/connections", headers=headers)

        assert created.status_code == 200
        assert created.json()["fromUserId"] == "u2"
        assert created.json()["isFavorite"] is False
        entries = listed.json()
        assert len(entries) == 1
        assert entries[0]["toUser"]["id"] == "u1"
        assert entries[0]["toProfile"]["name"] == "Alice"
        assert entries[0]["notes"] == "hi"

    def test_connection_without_profile_lists_null_profile(self, client, auth_headers, make_user):
        make_user("u1")
        headers = auth_headers("u2")

        client.post("/api/connections", json={"toUserId": "u1"}, headers=headers)
        entries = client.get("/api/connections", headers=headers).json()

        assert entries[0]["toProfile"] is None
        assert entries[0]["scanMethod"] == "link"

    def test_unknown_target_user_is_404(self, client, auth_headers):
        response = client.post(
            "/api/connections", json={"toUserId": "ghost"}, headers=auth_headers("u2")
        )

        assert response.status_code == 404
        assert response.json()["code"] == "USER_NOT_FOUND"

    def test_self_connection_is_a_validation_error(self, client, auth_headers):
        response = client.post(
            "/api/connections", json={"toUserId": "u1"}, headers=auth_headers("u1")
        )

        assert response.status_code == 500
        assert response.json()["code"] == "SELF_CONNECTION"

    def test_invalid_scan_method(self, client, auth_headers, make_user):
        make_user("u1")

        response = client.post(
            "/api/connections",
            json={"toUserId": "u1", "scanMethod": "telepathy"},
            headers=auth_headers("u2"),
        )

        assert response.status_code == 500

    def test_favorite_toggle_round_trip(self, client, auth_headers, make_user):
        make_user("u1")
        headers = auth_headers("u2")
        connection_id = client.post(
            "/api/connections", json={"toUserId": "u1"}, headers=headers
        ).json()["id"]

        first = client.patch(f"/api/connections/{connection_id}/favorite", headers=headers)
        after_first = client.get("/api/connections", headers=headers).json()[0]["isFavorite"]
        client.patch(f"/api/connections/{connection_id}/favorite", headers=headers)
        after_second = client.get("/api/connections", headers=headers).json()[0]["isFavorite"]

        assert first.json() == {"success": True}
        assert after_first is True
        assert after_second is False

    def test_foreign_favorite_toggle_reports_success_and_changes_nothing(
        self, client, auth_headers, make_user
    ):
        make_user("u1")
        owner = auth_headers("u2")
        connection_id = client.post(
            "/api/connections", json={"toUserId": "u1"}, headers=owner
        ).json()["id"]

        response = client.patch(
            f"/api/connections/{connection_id}/favorite", headers=auth_headers("u3")
        )

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert client.get("/api/connections", headers=owner).json()[0]["isFavorite"] is False

    def test_favorite_toggle_with_non_numeric_id(self, client, auth_headers):
        response = client.patch("/api/connections/abc/favorite", headers=auth_headers("u1"))

        assert response.status_code == 200
        assert response.json() == {"success": True}

    def test_favorite_toggle_with_id_beyond_column_range(self, client, auth_headers):
        response = client.patch(
            "/api/connections/99999999999999999999/favorite", headers=auth_headers("u1")
        )

        assert response.status_code == 200
        assert response.json() == {"success": True}

    def test_target_profile_beyond_column_range_is_404(self, client, auth_headers, make_user):
        make_user("u1")

        response = client.post(
            "/api/connections",
            json={"toUserId": "u1", "toProfileId": 99999999999999999999},
            headers=auth_headers("u2"),
        )

        assert response.status_code == 404
        assert response.json()["code"] == "PROFILE_NOT_FOUND"
