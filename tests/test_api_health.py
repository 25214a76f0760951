"""Tests for health check endpoint."""

import pytest
from httpx import ASGITransport, AsyncClient

from recouple.main import app


@pytest.fixture
async def client():
    """Provide an async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestHealthEndpoint:
    async def test_health_returns_healthy(self, client: AsyncClient) -> None:
        """Liveness probe returns healthy."""
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"

    async def test_health_has_no_dependencies(self, client: AsyncClient) -> None:
        """Health endpoint reports nothing beyond liveness."""
        response = await client.get("/health")

        assert response.json() == {"status": "healthy"}
