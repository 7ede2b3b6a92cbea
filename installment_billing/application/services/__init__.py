"""Application services (use cases)."""

from .plan_service import PlanService
from .payment_service import PaymentService
from .reminder_service import ReminderService
from .report_service import ReportService
from .currency_service import CurrencyService
from .rate_provider import RateTableProvider, rate_provider

__all__ = [
    "PlanService",
    "PaymentService",
    "ReminderService",
    "ReportService",
    "CurrencyService",
    "RateTableProvider",
    "rate_provider",
]
