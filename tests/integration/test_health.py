"""Integration tests for the liveness endpoints."""

import pytest
from httpx import AsyncClient


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_parent(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["parent_base_url"] == "http://parent.test"
        assert data["parent_configured"] is True

    @pytest.mark.asyncio
    async def test_health_does_not_call_parent(self, client: AsyncClient, mock_upstream):
        await client.get("/health")

        assert mock_upstream.call_count == 0

    @pytest.mark.asyncio
    async def test_head_returns_no_content(self, client: AsyncClient):
        response = await client.head("/health")

        assert response.status_code == 204
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_root_redirects_to_docs(self, client: AsyncClient):
        response = await client.get("/")

        assert response.status_code == 307
        assert response.headers["location"] == "/docs"
