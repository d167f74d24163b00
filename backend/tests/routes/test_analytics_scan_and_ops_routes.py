# backend/tests/routes/test_analytics_scan_and_ops_routes.py
"""
Route tests for analytics, scan, health and metrics endpoints.
"""

from tapcard.core.config import settings
from tapcard.models import Connection, ProfileView


class TestAnalytics:
    def test_stats_require_auth(self, client):
        assert client.get("/api/analytics/stats").status_code == 401

    def test_stats_without_profile_is_404(self, client, auth_headers):
        response = client.get("/api/analytics/stats", headers=auth_headers("u1"))

        assert response.status_code == 404

    def test_stats_shape(self, client, auth_headers, make_profile):
        profile = make_profile("u1")
        client.get(f"/api/profile/{profile.id}")

        response = client.get("/api/analytics/stats", headers=auth_headers("u1"))

        assert response.status_code == 200
        assert response.json() == {
            "connections": {"total": 0, "thisWeek": 0, "favorites": 0},
            "views": {"totalViews": 1, "todayViews": 1, "weekViews": 1},
        }

    def test_views_listing(self, client, make_profile):
        profile = make_profile("u1")
        client.post(f"/api/profile/{profile.id}/view", json={"viewerLocation": "Oslo"})

        response = client.get(f"/api/analytics/views/{profile.id}")

        assert response.status_code == 200
        assert [v["viewerLocation"] for v in response.json()] == ["Oslo"]

    def test_views_listing_with_bad_id(self, client):
        assert client.get("/api/analytics/views/xyz").status_code == 404

    def test_views_listing_with_id_beyond_column_range(self, client):
        response = client.get("/api/analytics/views/99999999999999999999")

        assert response.status_code == 404
        assert response.json()["code"] == "PROFILE_NOT_FOUND"


class TestScan:
    def test_anonymous_scan_of_profile_url(self, client, db, make_profile):
        profile = make_profile("u1", name="Alice")

        response = client.post(
            "/api/scan", json={"token": f"https://cards.test/profile/{profile.id}"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["source"] == "url"
        assert body["profile"]["name"] == "Alice"
        assert body["connectionId"] is None
        assert db.query(ProfileView).count() == 1

    def test_authenticated_scan_creates_connection(self, client, db, auth_headers, make_profile):
        profile = make_profile("u1", nfc_tag_id="tag-77")

        response = client.post(
            "/api/scan", json={"token": "tag-77", "scanMethod": "nfc"}, headers=auth_headers("u2")
        )

        assert response.status_code == 200
        assert response.json()["source"] == "nfc_tag"
        connection = db.query(Connection).one()
        assert connection.from_user_id == "u2"
        assert connection.to_profile_id == profile.id
        assert response.json()["connectionId"] == connection.id

    def test_unknown_token_is_404(self, client):
        response = client.post("/api/scan", json={"token": "garbage-token"})

        assert response.status_code == 404
        assert response.json()["code"] == "PROFILE_NOT_FOUND"

    def test_numeric_token_beyond_column_range_is_404(self, client):
        response = client.post("/api/scan", json={"token": "99999999999999999999"})

        assert response.status_code == 404
        assert response.json()["code"] == "PROFILE_NOT_FOUND"

    def test_url_token_beyond_column_range_is_404(self, client):
        response = client.post(
            "/api/scan", json={"token": "https://cards.test/profile/99999999999999999999"}
        )

        assert response.status_code == 404

    def test_empty_token_is_a_validation_error(self, client):
        response = client.post("/api/scan", json={"token": "  "})

        assert response.status_code == 500
        assert response.json()["code"] == "INVALID_SCAN_TOKEN"

    def test_validation_errors_can_map_to_400(self, client, monkeypatch):
        monkeypatch.setattr(settings, "validation_errors_as_bad_request", True)

        response = client.post("/api/scan", json={"token": ""})

        assert response.status_code == 400


class TestOps:
    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_metrics_exposition(self, client, make_profile):
        profile = make_profile("u1")
        client.get(f"/api/profile/{profile.id}")

        response = client.get("/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "tapcard_profile_views_recorded_total" in response.text
        assert "tapcard_service_operations_total" in response.text
