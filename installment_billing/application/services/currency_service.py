"""Currency service - display conversion and exchange-rate refresh."""

from decimal import ROUND_HALF_UP, Decimal

import structlog

from installment_billing.domain.exceptions import (
    ExchangeRateAPIException,
    UnsupportedCurrencyException,
)
from installment_billing.domain.interfaces import ExchangeRateClient
from installment_billing.application.dto import ConversionResponse, RateTableResponse
from installment_billing.service.billing import convert, format_amount
from installment_billing.service.billing.currency import decimals_for

from .rate_provider import RateTableProvider

logger = structlog.get_logger(__name__)


class CurrencyService:
    """Converts base-currency amounts for display and refreshes rates."""

    def __init__(self, provider: RateTableProvider, client: ExchangeRateClient):
        self._provider = provider
        self._client = client

    def rates(self) -> RateTableResponse:
        return RateTableResponse.from_table(self._provider.table)

    def convert(
        self,
        amount: Decimal,
        from_code: str,
        to_code: str,
    ) -> ConversionResponse:
        """
        Convert an amount and format it in the target currency.

        The core passes unknown codes through unchanged; at the API
        boundary they are rejected instead.

        Raises:
            UnsupportedCurrencyException: If either code is not in the table
        """
        table = self._provider.table
        from_code = from_code.upper()
        to_code = to_code.upper()
        for code in (from_code, to_code):
            if code not in table:
                raise UnsupportedCurrencyException(code)

        converted = convert(amount, from_code, to_code, table)
        places = decimals_for(to_code, table)
        rounded = converted.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)

        return ConversionResponse(
            amount=Decimal(amount),
            from_currency=from_code,
            to_currency=to_code,
            converted=rounded,
            formatted=format_amount(converted, to_code, table),
        )

    async def refresh(self) -> RateTableResponse:
        """
        Pull fresh rates from the exchange-rate API.

        Raises:
            ExchangeRateAPIException: If the API fails; the previous
                rates stay in effect
        """
        try:
            table = await self._provider.refresh(self._client)
        except ExchangeRateAPIException as e:
            logger.warning(
                "exchange_rate_refresh_failed",
                error=e.message,
                status_code=e.status_code,
                keeping_as_of=(
                    self._provider.table.as_of.isoformat()
                    if self._provider.table.as_of
                    else None
                ),
            )
            raise

        return RateTableResponse.from_table(table)
