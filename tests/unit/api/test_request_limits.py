"""Tests for API request size limits and health."""

from fastapi.testclient import TestClient

from viewer import __version__
from viewer.api.main import MAX_REQUEST_SIZE, app


class TestRequestSizeLimits:
    """Request body size limit."""

    def test_oversized_request_returns_413(self):
        """Request with Content-Length exceeding limit returns 413."""
        client = TestClient(app)
        response = client.post(
            "/baskets",
            json={"baskets": []},
            headers={"Content-Length": str(2 * MAX_REQUEST_SIZE)},
        )
        assert response.status_code == 413
        assert response.json()["detail"] == "Request too large"

    def test_too_many_entities_rejected(self):
        """Batches above MAX_BATCH_SIZE fail request validation."""
        client = TestClient(app)
        response = client.post("/tokens/supplies", json={"tokens": ["0x" + "11" * 20] * 501})
        assert response.status_code == 422


class TestHealthEndpoint:
    """Health endpoint."""

    def test_health_returns_ok(self):
        client = TestClient(app)
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__}
