"""
Installment Billing Core

Pure functions over snapshots of plans and payments: schedule generation,
effective status, reporting windows, summaries, reports, reminders and
currency display. Nothing here performs I/O.
"""

from .settings import BillingSettings, billing_settings
from .models import PaymentReport, PaymentSummary, ReportSummary
from .money import CENT, from_cents, to_cents, to_money
from .schedule import (
    add_months,
    calculate_monthly_payment,
    generate_schedule,
    plan_end_date,
)
from .status import effective_status, is_overdue, overdue_payments
from .windows import DateWindow, TimeRange, payments_in_window, resolve_window
from .summary import summarize
from .report import generate_report
from .reminders import plan_reminders, reminders_due
from .currency import (
    DEFAULT_RATE_TABLE,
    CurrencyInfo,
    RateTable,
    convert,
    format_amount,
)

__all__ = [
    # Settings
    "BillingSettings",
    "billing_settings",
    # Models
    "PaymentReport",
    "PaymentSummary",
    "ReportSummary",
    # Money
    "CENT",
    "from_cents",
    "to_cents",
    "to_money",
    # Schedule
    "add_months",
    "calculate_monthly_payment",
    "generate_schedule",
    "plan_end_date",
    # Status
    "effective_status",
    "is_overdue",
    "overdue_payments",
    # Windows
    "DateWindow",
    "TimeRange",
    "payments_in_window",
    "resolve_window",
    # Aggregation
    "summarize",
    "generate_report",
    # Reminders
    "plan_reminders",
    "reminders_due",
    # Currency
    "DEFAULT_RATE_TABLE",
    "CurrencyInfo",
    "RateTable",
    "convert",
    "format_amount",
]
