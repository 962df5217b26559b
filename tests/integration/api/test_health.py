"""Tests for health check endpoints."""

import pytest
from httpx import AsyncClient

from api.routes.health import API_VERSION


class TestHealthEndpoint:
    @pytest.mark.asyncio
    async def test_liveness(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == API_VERSION
        assert {"timestamp", "environment"} <= set(data)

    @pytest.mark.asyncio
    async def test_readiness_pings_database(self, client: AsyncClient) -> None:
        """The configured database answers, so the service is fully healthy."""
        response = await client.get("/health/detailed")

        assert response.status_code == 200
        data = response.json()
        assert data["database"] == "healthy"
        assert data["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_security_headers_on_every_response(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.headers["x-content-type-options"] == "nosniff"
        assert "x-request-id" in response.headers
