"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .plan import InvalidPlanRequestException, PlanNotFoundException
from .payment import (
    InvalidPaymentRequestException,
    InvalidStatusTransitionException,
    PaymentNotFoundException,
)
from .reminder import ReminderNotFoundException
from .currency import ExchangeRateAPIException, UnsupportedCurrencyException

__all__ = [
    "DomainException",
    "InvalidPlanRequestException",
    "PlanNotFoundException",
    "InvalidPaymentRequestException",
    "InvalidStatusTransitionException",
    "PaymentNotFoundException",
    "ReminderNotFoundException",
    "ExchangeRateAPIException",
    "UnsupportedCurrencyException",
]
