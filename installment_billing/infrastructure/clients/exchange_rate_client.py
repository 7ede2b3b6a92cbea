"""HTTP implementation of ExchangeRateClient."""

import asyncio
from datetime import date, datetime
from typing import Any, Dict

import httpx
import structlog

from installment_billing.core.config import settings
from installment_billing.core.metrics import (
    track_exchange_rate_latency,
    record_exchange_rate_success,
    record_exchange_rate_failure,
)
from installment_billing.domain.exceptions import ExchangeRateAPIException
from installment_billing.domain.interfaces import ExchangeRateClient
from installment_billing.service.billing.currency import RateTable

logger = structlog.get_logger(__name__)


class HttpExchangeRateClient(ExchangeRateClient):
    """
    Client for an exchangerate-api style endpoint.

    ``GET {base_url}/{base}`` is expected to return
    ``{"base": "PHP", "date": "2024-01-31", "rates": {"USD": 0.0179, ...}}``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or settings.exchange_rate_api_url).rstrip("/")
        self._timeout = timeout or settings.exchange_rate_timeout
        self._max_retries = max_retries
        self._transport = transport

    async def fetch_rates(self, current: RateTable) -> RateTable:
        """
        Fetch the latest rates relative to ``current.base``.

        Implements retry logic with exponential backoff on timeouts and
        transport errors. HTTP error responses fail immediately.
        """
        url = f"{self._base_url}/{current.base}"
        last_exception = None

        for attempt in range(self._max_retries):
            try:
                with track_exchange_rate_latency():
                    async with httpx.AsyncClient(
                        timeout=self._timeout, transport=self._transport
                    ) as client:
                        response = await client.get(url)

                if response.status_code >= 400:
                    record_exchange_rate_failure("error")
                    raise ExchangeRateAPIException(
                        message=f"Exchange rate API error: {response.text[:200]}",
                        status_code=response.status_code,
                    )

                try:
                    data = response.json()
                except ValueError as e:
                    record_exchange_rate_failure("invalid_payload")
                    raise ExchangeRateAPIException(
                        f"Exchange rate API returned invalid JSON: {e}"
                    ) from e

                table = self._parse_rates(data, current)
                record_exchange_rate_success()
                return table

            except httpx.TimeoutException:
                record_exchange_rate_failure("timeout")
                last_exception = ExchangeRateAPIException(
                    "Exchange rate API request timed out"
                )
                logger.warning(
                    "exchange_rate_timeout",
                    attempt=attempt + 1,
                    max_retries=self._max_retries,
                )
            except httpx.HTTPError as e:
                record_exchange_rate_failure("transport")
                last_exception = ExchangeRateAPIException(
                    f"Exchange rate API unreachable: {e}"
                )
                logger.error(
                    "exchange_rate_error",
                    attempt=attempt + 1,
                    error=str(e),
                )

            if attempt < self._max_retries - 1:
                await asyncio.sleep(2**attempt * 0.1)

        raise last_exception or ExchangeRateAPIException("Failed to fetch rates")

    def _parse_rates(self, data: Dict[str, Any], current: RateTable) -> RateTable:
        """Parse the API payload into a new table derived from ``current``."""
        rates = data.get("rates")
        if not isinstance(rates, dict):
            record_exchange_rate_failure("invalid_payload")
            raise ExchangeRateAPIException("Exchange rate payload has no rates")

        as_of = date.today()
        raw_date = data.get("date")
        if isinstance(raw_date, str):
            try:
                as_of = datetime.strptime(raw_date[:10], "%Y-%m-%d").date()
            except ValueError:
                logger.warning("exchange_rate_bad_date", value=raw_date)

        return current.with_rates(rates, as_of=as_of)
