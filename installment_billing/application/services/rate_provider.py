"""Process-wide holder of the current exchange-rate table."""

import structlog

from installment_billing.domain.interfaces import ExchangeRateClient
from installment_billing.service.billing.currency import DEFAULT_RATE_TABLE, RateTable

logger = structlog.get_logger(__name__)


class RateTableProvider:
    """
    Holds the RateTable used for conversions.

    Tables are immutable; a refresh swaps the reference to a new table,
    so readers always see either the old or the new table in full. A
    failed refresh keeps the previous table.
    """

    def __init__(self, table: RateTable = DEFAULT_RATE_TABLE):
        self._table = table

    @property
    def table(self) -> RateTable:
        return self._table

    async def refresh(self, client: ExchangeRateClient) -> RateTable:
        """
        Fetch new rates and swap them in.

        Raises:
            ExchangeRateAPIException: If the fetch fails; the current
                table is kept
        """
        new_table = await client.fetch_rates(self._table)
        self._table = new_table
        logger.info(
            "exchange_rates_refreshed",
            base=new_table.base,
            as_of=new_table.as_of.isoformat() if new_table.as_of else None,
        )
        return new_table


rate_provider = RateTableProvider()
