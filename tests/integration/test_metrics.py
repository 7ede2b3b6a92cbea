"""Integration tests for the health check and Prometheus metrics."""

import pytest
from httpx import AsyncClient


class TestHealth:

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "ok"


class TestMetrics:

    @pytest.mark.asyncio
    async def test_metrics_endpoint(self, client: AsyncClient):
        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]

    @pytest.mark.asyncio
    async def test_plan_creation_is_counted(
        self, client: AsyncClient, create_plan, interest_plan_request
    ):
        await create_plan(client, interest_plan_request)

        response = await client.get("/metrics")

        assert "installment_plans_created_total" in response.text
        assert "installment_financed_amount" in response.text

    @pytest.mark.asyncio
    async def test_requests_are_counted(self, client: AsyncClient):
        await client.get("/v1/plans")

        response = await client.get("/metrics")

        assert "installment_http_requests_total" in response.text
