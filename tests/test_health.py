"""
Bookmarks API - Health Check and Middleware Tests
==================================================

What we test:
    ✅ /health reports a connected database
    ✅ /health reports 503 when the database is unreachable
    ✅ Every response carries X-Request-ID; a client-supplied id is echoed
    ✅ Error bodies carry the same request id
"""

from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from bookmarks_api import __version__


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_ok(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["version"] == __version__
        assert body["uptime_seconds"] >= 0

    @pytest.mark.asyncio
    async def test_health_database_down(self, client):
        with patch("bookmarks_api.routes.health.engine") as mock_engine:
            mock_engine.connect.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))

            response = await client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
        assert response.json()["database"] == "disconnected"


class TestRequestId:

    @pytest.mark.asyncio
    async def test_request_id_generated(self, client):
        response = await client.get("/health")
        assert response.headers.get("x-request-id")

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, client):
        response = await client.get("/health", headers={"X-Request-ID": "abc123"})
        assert response.headers["x-request-id"] == "abc123"

    @pytest.mark.asyncio
    async def test_oversized_request_id_replaced(self, client):
        response = await client.get("/health", headers={"X-Request-ID": "x" * 500})
        assert response.headers["x-request-id"] != "x" * 500

    @pytest.mark.asyncio
    async def test_error_body_carries_request_id(self, client):
        response = await client.get("/users/me", headers={"X-Request-ID": "trace-1"})

        assert response.status_code == 401
        assert response.json()["request_id"] == "trace-1"
