"""
Tests for health endpoints and request-level middleware.
"""


class TestHealth:
    def test_health(self, client):
        # Act
        response = client.get("/api/v1/health")

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Server is running"
        assert body["data"] == {"status": "healthy", "message": "Server Healthy"}
        assert "timestamp" in body

    def test_vector_store_health_reports_fallback(self, client):
        response = client.get("/api/v1/health/vector-store")

        assert response.status_code == 200
        assert response.json()["data"] == {
            "vectorStoreType": "Memory",
            "usingMemoryFallback": True,
            "healthy": True,
        }


class TestMiddleware:
    def test_correlation_id_echoed(self, client):
        response = client.get("/api/v1/health", headers={"X-Correlation-ID": "req-123"})

        assert response.headers["X-Correlation-ID"] == "req-123"

    def test_correlation_id_generated(self, client):
        response = client.get("/api/v1/health")

        assert len(response.headers["X-Correlation-ID"]) == 32

    def test_unknown_route_uses_error_envelope(self, client):
        response = client.get("/api/v1/nope")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["error"]["statusCode"] == 404

    def test_openapi_reports_service_identity(self, client, test_settings):
        info = client.get("/openapi.json").json()["info"]

        assert info["title"] == test_settings.app_name
        assert info["version"] == test_settings.app_version
