"""API endpoints for currency display."""

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from installment_billing.application.services import CurrencyService
from installment_billing.core.dependencies import get_currency_service
from installment_billing.presentation.schemas import (
    ConversionResponseSchema,
    ErrorResponseSchema,
    RateTableResponseSchema,
)
from installment_billing.service.billing import billing_settings

currency_router = APIRouter(prefix="/currency")


@currency_router.get(
    "/rates",
    response_model=RateTableResponseSchema,
    summary="Current Exchange Rates",
)
async def get_rates(
    currency_service: Annotated[CurrencyService, Depends(get_currency_service)],
) -> RateTableResponseSchema:
    return RateTableResponseSchema.from_dto(currency_service.rates())


@currency_router.get(
    "/convert",
    response_model=ConversionResponseSchema,
    summary="Convert Amount",
    description="Convert an amount between currencies and format it for display.",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Unsupported currency"},
    },
)
async def convert_amount(
    currency_service: Annotated[CurrencyService, Depends(get_currency_service)],
    amount: Annotated[Decimal, Query(description="Amount to convert")],
    to_currency: Annotated[
        str,
        Query(min_length=3, max_length=3, description="Target currency code"),
    ],
    from_currency: Annotated[
        str,
        Query(min_length=3, max_length=3, description="Source currency code"),
    ] = billing_settings.base_currency,
) -> ConversionResponseSchema:
    response = currency_service.convert(amount, from_currency, to_currency)
    return ConversionResponseSchema.from_dto(response)


@currency_router.post(
    "/refresh",
    response_model=RateTableResponseSchema,
    summary="Refresh Exchange Rates",
    description="Fetch fresh rates. On failure the previous rates stay in effect.",
    responses={
        503: {"model": ErrorResponseSchema, "description": "Exchange-rate API unavailable"},
    },
)
async def refresh_rates(
    currency_service: Annotated[CurrencyService, Depends(get_currency_service)],
) -> RateTableResponseSchema:
    response = await currency_service.refresh()
    return RateTableResponseSchema.from_dto(response)
