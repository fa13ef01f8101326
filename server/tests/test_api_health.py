"""Simple API health tests without database."""

import pytest
from httpx import ASGITransport, AsyncClient

from voyage.main import create_app


@pytest.mark.asyncio
async def test_api_health_endpoint():
    """Test the liveness endpoint without database dependency."""
    app = create_app()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"

        # Every response carries a request ID
        assert response.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_request_id_is_echoed():
    """A caller-supplied request ID is passed back."""
    app = create_app()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/health", headers={"X-Request-ID": "req-zanzibar-42"})
        assert response.headers["X-Request-ID"] == "req-zanzibar-42"


@pytest.mark.asyncio
async def test_metrics_endpoint():
    """Test the metrics endpoint."""
    app = create_app()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/metrics")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")


@pytest.mark.asyncio
async def test_openapi_schema_lists_rpc_routes():
    """The OpenAPI schema describes the RPC routes."""
    app = create_app()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/openapi.json")
        assert response.status_code == 200
        paths = response.json()["paths"]
        assert "/v1/booking/track" in paths
        assert "/v1/tour/toggle-publish" in paths
