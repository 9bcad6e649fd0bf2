"""Integration tests for the health endpoints."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    res = await client.get("/health")

    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_liveness(client: AsyncClient):
    res = await client.get("/live")

    assert res.status_code == 200
    assert res.json()["status"] == "alive"


@pytest.mark.asyncio
async def test_correlation_id_header(client: AsyncClient):
    res = await client.get("/health", headers={"X-Correlation-ID": "test-correlation"})

    assert res.headers["X-Correlation-ID"] == "test-correlation"
