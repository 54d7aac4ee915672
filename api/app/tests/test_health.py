from __future__ import annotations

import pytest

from app.core.config import settings


@pytest.mark.asyncio
async def test_health_reports_ok(client):
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_root_banner(client):
    response = await client.get("/")
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == settings.app_name
    assert body["version"] == settings.app_version


@pytest.mark.asyncio
async def test_unknown_route_uses_error_body(client):
    response = await client.get("/api/nope")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}
