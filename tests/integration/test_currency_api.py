"""Integration tests for currency display endpoints."""

import pytest
from httpx import AsyncClient


def _rate(table: dict, code: str) -> float:
    return next(c["rate"] for c in table["currencies"] if c["code"] == code)


class TestRates:
    """Tests for GET /v1/currency/rates."""

    @pytest.mark.asyncio
    async def test_default_rates(self, client: AsyncClient):
        response = await client.get("/v1/currency/rates")

        assert response.status_code == 200
        data = response.json()
        assert data["base"] == "PHP"
        assert _rate(data, "PHP") == 1.0
        assert _rate(data, "USD") == 0.0179


class TestConvert:
    """Tests for GET /v1/currency/convert."""

    @pytest.mark.asyncio
    async def test_convert_to_usd(self, client: AsyncClient):
        response = await client.get(
            "/v1/currency/convert", params={"amount": "1000", "to_currency": "USD"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["from_currency"] == "PHP"
        assert data["converted"] == 17.9
        assert data["formatted"] == "$17.90"

    @pytest.mark.asyncio
    async def test_zero_decimal_currency(self, client: AsyncClient):
        response = await client.get(
            "/v1/currency/convert", params={"amount": "1000", "to_currency": "jpy"}
        )

        data = response.json()
        assert data["to_currency"] == "JPY"
        assert data["formatted"] == "¥2,740"

    @pytest.mark.asyncio
    async def test_unsupported_currency_returns_400(self, client: AsyncClient):
        response = await client.get(
            "/v1/currency/convert", params={"amount": "1000", "to_currency": "XYZ"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "UNSUPPORTED_CURRENCY"

    @pytest.mark.asyncio
    async def test_bad_code_length_returns_422(self, client: AsyncClient):
        response = await client.get(
            "/v1/currency/convert", params={"amount": "1000", "to_currency": "US"}
        )

        assert response.status_code == 422


class TestRefresh:
    """Tests for POST /v1/currency/refresh."""

    @pytest.mark.asyncio
    async def test_refresh_applies_new_rates(self, client: AsyncClient, mock_exchange_client):
        response = await client.post("/v1/currency/refresh")

        assert response.status_code == 200
        data = response.json()
        assert data["as_of"] == "2024-03-15"
        assert _rate(data, "USD") == 0.02
        assert mock_exchange_client.call_count == 1

        converted = await client.get(
            "/v1/currency/convert", params={"amount": "1000", "to_currency": "USD"}
        )
        assert converted.json()["formatted"] == "$20.00"

    @pytest.mark.asyncio
    async def test_failed_refresh_keeps_previous_rates(
        self, client_with_failing_ports: AsyncClient
    ):
        client = client_with_failing_ports

        response = await client.post("/v1/currency/refresh")

        assert response.status_code == 503
        assert response.json()["error"] == "EXCHANGE_RATE_API_ERROR"

        rates = (await client.get("/v1/currency/rates")).json()
        assert _rate(rates, "USD") == 0.0179
