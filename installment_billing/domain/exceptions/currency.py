"""Exchange-rate API domain exceptions."""

from .base import DomainException


class ExchangeRateAPIException(DomainException):
    """Raised when the exchange-rate API fails or returns unusable data."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            message=message,
            code="EXCHANGE_RATE_API_ERROR",
        )
        self.status_code = status_code


class UnsupportedCurrencyException(DomainException):
    """Raised when a currency code is not in the rate table."""

    def __init__(self, code: str):
        super().__init__(
            message=f"Unsupported currency: {code}",
            code="UNSUPPORTED_CURRENCY",
        )
        self.currency_code = code
