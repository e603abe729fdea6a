"""Tests for health check endpoint."""


class TestHealthEndpoint:
    """Tests for health check endpoint."""

    def test_health_check(self, client):
        """Health endpoint should return 200 with counts."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["users"] == 4
        assert data["sessions"] == 0

    def test_health_response_structure(self, client):
        """Health response should expose counts only."""
        response = client.get("/api/health")
        assert set(response.json().keys()) == {"status", "users", "sessions"}

    def test_health_needs_no_auth(self, client):
        assert client.get("/api/health", headers={"Authorization": "Bearer junk"}).status_code == 200

    def test_sessions_count_grows_lazily(self, client, auth_headers):
        client.get("/api/basket", headers=auth_headers)
        assert client.get("/api/health").json()["sessions"] == 1

    def test_users_count_grows_on_create(self, client):
        client.post("/api/admin/users", json={"username": "zed", "password": "zzz123"})
        assert client.get("/api/health").json()["users"] == 5
