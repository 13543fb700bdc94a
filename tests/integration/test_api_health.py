"""Integration tests for health endpoints."""

from fastapi.testclient import TestClient


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_returns_ok(self, api_client: TestClient):
        """Basic health check should return OK."""
        response = api_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "timestamp" in data

    def test_info_returns_service_info(self, api_client: TestClient):
        """Info endpoint should return service metadata and defaults."""
        response = api_client.get("/health/info")

        assert response.status_code == 200
        data = response.json()
        assert data["service"] == "PourCost API"
        assert "version" in data
        assert data["defaults"]["pour_cost_goal"] == 20.0
        assert data["defaults"]["base_currency"] == "USD"

    def test_request_id_is_echoed(self, api_client: TestClient):
        response = api_client.get("/health", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"
        assert "X-Response-Time-Ms" in response.headers


class TestErrorEnvelope:
    """Tests for the shared error response shape."""

    def test_engine_error_envelope(self, api_client: TestClient):
        response = api_client.get(
            "/api/v1/units/convert?value=1&from_unit=furlong&to_unit=oz",
            headers={"X-Request-ID": "req-42"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"]["code"] == "UNSUPPORTED_UNIT"
        assert body["error"]["details"] == {"unit": "furlong"}
        assert body["request_id"] == "req-42"
        assert "timestamp" in body

    def test_validation_errors_name_fields(self, api_client: TestClient):
        response = api_client.get("/api/v1/units/convert?value=-1&from_unit=ml&to_unit=oz")

        assert response.status_code == 400
        errors = response.json()["error"]["details"]["errors"]
        assert errors[0]["field"] == "query.value"

    def test_api_error_keeps_its_status(self, api_client: TestClient):
        response = api_client.get("/api/v1/units/parse?text=lots")

        assert response.status_code == 422
        assert response.json()["error"]["details"] == {"kind": "volume", "text": "lots"}
