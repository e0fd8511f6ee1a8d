"""Unit tests for health check routes."""

import pytest

from routes.health_routes import SERVICE_NAME, health


@pytest.mark.unit
class TestHealthEndpoint:
    """Tests for GET /health."""

    async def test_health_returns_healthy(self):
        """Health handler reports status=healthy."""
        result = await health()
        assert result.status == "healthy"
        assert result.service == "certificate-renderer"

    async def test_health_over_http(self, client):
        """GET /health returns 200 with the service name."""
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": SERVICE_NAME}
