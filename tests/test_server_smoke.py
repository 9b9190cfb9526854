"""Smoke test against a running server (uvicorn review_workflows.main:app)."""

import os

import httpx
import pytest

from review_workflows.core.config import settings

SERVER_URL = os.environ.get("SERVER_URL", "http://localhost:8000")


@pytest.mark.server
@pytest.mark.asyncio
async def test_running_server_is_healthy_and_lists_workflows():
    async with httpx.AsyncClient(base_url=SERVER_URL, timeout=10) as client:
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["db_ok"] is True

        response = await client.get(f"{settings.API_PREFIX}/workflows")
        assert response.status_code == 200
        assert isinstance(response.json(), list)
