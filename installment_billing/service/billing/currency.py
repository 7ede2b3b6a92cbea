"""
Currency Conversion for display.

All amounts are stored in the base currency (PHP). Conversion and
formatting take an explicit ``RateTable``; tables are immutable and a
refresh produces a new table instead of editing a shared one.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType
from typing import Iterable, Mapping

from .settings import billing_settings


@dataclass(frozen=True)
class CurrencyInfo:
    """
    Display metadata and exchange rate for one currency.

    Attributes:
        code: ISO 4217 code
        name: Human-readable name
        symbol: Display symbol
        rate: Units of this currency per one unit of the base currency
    """

    code: str
    name: str
    symbol: str
    rate: Decimal


@dataclass(frozen=True)
class RateTable:
    """Immutable snapshot of exchange rates keyed by currency code."""

    base: str
    currencies: Mapping[str, CurrencyInfo]
    as_of: date | None = None
    zero_decimal: frozenset = field(default_factory=lambda: frozenset({"JPY", "KRW"}))

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "currencies", MappingProxyType(dict(self.currencies))
        )

    def get(self, code: str) -> CurrencyInfo | None:
        return self.currencies.get(code.upper())

    def __contains__(self, code: str) -> bool:
        return code.upper() in self.currencies

    @property
    def codes(self) -> list[str]:
        return sorted(self.currencies)

    def with_rates(
        self,
        rates: Mapping[str, float | Decimal | str],
        as_of: date | None = None,
    ) -> "RateTable":
        """
        Return a new table with updated rates.

        Codes missing from this table are ignored; the base currency keeps
        a rate of 1.
        """
        updated = dict(self.currencies)
        for code, rate in rates.items():
            code = code.upper()
            if code in updated and code != self.base:
                updated[code] = replace(updated[code], rate=Decimal(str(rate)))
        return RateTable(
            base=self.base,
            currencies=updated,
            as_of=as_of or self.as_of,
            zero_decimal=self.zero_decimal,
        )


def build_rate_table(
    base: str,
    currencies: Iterable[CurrencyInfo],
    zero_decimal: Iterable[str] = ("JPY", "KRW"),
) -> RateTable:
    return RateTable(
        base=base,
        currencies={c.code: c for c in currencies},
        zero_decimal=frozenset(zero_decimal),
    )


DEFAULT_RATE_TABLE = build_rate_table(
    base="PHP",
    currencies=[
        CurrencyInfo("PHP", "Philippine Peso", "₱", Decimal("1")),
        CurrencyInfo("USD", "US Dollar", "$", Decimal("0.0179")),
        CurrencyInfo("EUR", "Euro", "€", Decimal("0.0164")),
        CurrencyInfo("GBP", "British Pound", "£", Decimal("0.0141")),
        CurrencyInfo("JPY", "Japanese Yen", "¥", Decimal("2.74")),
        CurrencyInfo("SGD", "Singapore Dollar", "S$", Decimal("0.0241")),
        CurrencyInfo("MYR", "Malaysian Ringgit", "RM", Decimal("0.0798")),
        CurrencyInfo("THB", "Thai Baht", "฿", Decimal("0.606")),
        CurrencyInfo("AUD", "Australian Dollar", "A$", Decimal("0.0267")),
        CurrencyInfo("CAD", "Canadian Dollar", "C$", Decimal("0.0243")),
        CurrencyInfo("CNY", "Chinese Yuan", "¥", Decimal("0.1297")),
        CurrencyInfo("HKD", "Hong Kong Dollar", "HK$", Decimal("0.1397")),
        CurrencyInfo("INR", "Indian Rupee", "₹", Decimal("1.4912")),
        CurrencyInfo("KRW", "South Korean Won", "₩", Decimal("24.0132")),
    ],
    zero_decimal=billing_settings.zero_decimal_currencies,
)


def convert_from_base(amount: Decimal, target: str, table: RateTable) -> Decimal:
    currency = table.get(target)
    if currency is None:
        return Decimal(amount)
    return Decimal(amount) * currency.rate


def convert_to_base(amount: Decimal, source: str, table: RateTable) -> Decimal:
    currency = table.get(source)
    if currency is None:
        return Decimal(amount)
    return Decimal(amount) / currency.rate


def convert(
    amount: Decimal,
    from_code: str,
    to_code: str,
    table: RateTable,
) -> Decimal:
    """
    Convert between any two currencies through the base currency.

    Unknown codes are treated as the base currency, so the amount passes
    through unchanged on that leg.
    """
    if from_code.upper() == to_code.upper():
        return Decimal(amount)
    base_amount = convert_to_base(amount, from_code, table)
    return convert_from_base(base_amount, to_code, table)


def decimals_for(code: str, table: RateTable) -> int:
    return 0 if code.upper() in table.zero_decimal else 2


def format_amount(amount: Decimal, code: str, table: RateTable) -> str:
    """
    Format an amount with its currency symbol and thousands separators.

    JPY and KRW render without decimals; unknown codes render the bare
    number.
    """
    places = decimals_for(code, table)
    exponent = Decimal(1).scaleb(-places)
    rounded = Decimal(amount).quantize(exponent, rounding=ROUND_HALF_UP)
    text = f"{rounded:,.{places}f}"

    currency = table.get(code)
    if currency is None:
        return text
    return f"{currency.symbol}{text}"


def currency_symbol(code: str, table: RateTable) -> str:
    currency = table.get(code)
    return currency.symbol if currency else code
