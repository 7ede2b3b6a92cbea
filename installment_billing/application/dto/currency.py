"""Data transfer objects for currency display."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

from installment_billing.service.billing import RateTable


@dataclass(frozen=True)
class ConversionResponse:
    amount: Decimal
    from_currency: str
    to_currency: str
    converted: Decimal
    formatted: str


@dataclass(frozen=True)
class CurrencyDTO:
    code: str
    name: str
    symbol: str
    rate: Decimal


@dataclass(frozen=True)
class RateTableResponse:
    base: str
    as_of: Optional[date]
    currencies: List[CurrencyDTO] = field(default_factory=list)

    @classmethod
    def from_table(cls, table: RateTable) -> "RateTableResponse":
        return cls(
            base=table.base,
            as_of=table.as_of,
            currencies=[
                CurrencyDTO(
                    code=info.code,
                    name=info.name,
                    symbol=info.symbol,
                    rate=info.rate,
                )
                for info in (table.get(code) for code in table.codes)
            ],
        )
