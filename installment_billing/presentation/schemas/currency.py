"""Currency-related Pydantic schemas."""

from datetime import date
from typing import Optional

from pydantic import BaseModel

from installment_billing.application.dto import ConversionResponse, RateTableResponse


class CurrencySchema(BaseModel):
    code: str
    name: str
    symbol: str
    rate: float


class RateTableResponseSchema(BaseModel):
    """Schema for GET /v1/currency/rates."""

    base: str
    as_of: Optional[date] = None
    currencies: list[CurrencySchema]

    @classmethod
    def from_dto(cls, dto: RateTableResponse) -> "RateTableResponseSchema":
        return cls(
            base=dto.base,
            as_of=dto.as_of,
            currencies=[
                CurrencySchema(
                    code=c.code,
                    name=c.name,
                    symbol=c.symbol,
                    rate=float(c.rate),
                )
                for c in dto.currencies
            ],
        )


class ConversionResponseSchema(BaseModel):
    """Schema for GET /v1/currency/convert."""

    amount: float
    from_currency: str
    to_currency: str
    converted: float
    formatted: str

    @classmethod
    def from_dto(cls, dto: ConversionResponse) -> "ConversionResponseSchema":
        return cls(
            amount=float(dto.amount),
            from_currency=dto.from_currency,
            to_currency=dto.to_currency,
            converted=float(dto.converted),
            formatted=dto.formatted,
        )
