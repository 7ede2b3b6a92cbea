"""
Reporting windows and date-range bucketing.

Payments are bucketed by their effective date (payment date when paid,
due date otherwise). Windows are open intervals: a payment is inside
only when its effective date, taken at midnight, falls strictly after
the window start and strictly before the window end.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Iterable, List

from installment_billing.domain.entities import InstallmentPayment

from .settings import BillingSettings, billing_settings


class TimeRange(str, Enum):
    """Named reporting windows."""

    MONTH = "month"  # Current calendar month
    YEAR = "year"  # Current calendar year
    ALL = "all"  # Fixed, very wide window


@dataclass(frozen=True)
class DateWindow:
    """An open interval (start, end) of instants."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start < moment < self.end


def as_instant(value: date | datetime) -> datetime:
    """Promote a date to midnight; datetimes pass through (tz dropped)."""
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    return datetime.combine(value, time.min)


def window_between(start: date | datetime, end: date | datetime) -> DateWindow:
    return DateWindow(start=as_instant(start), end=as_instant(end))


def resolve_window(
    time_range: TimeRange | str,
    now: datetime | None = None,
    settings: BillingSettings | None = None,
) -> DateWindow:
    """
    Turn a named time range into a concrete window.

    - month: first instant of the current month to its last instant
    - year: Jan 1 00:00 to Dec 31 23:59:59.999999 of the current year
    - all: the configured all-time window (2000-01-01 to 2100-12-31)

    Args:
        time_range: One of TimeRange (or its string value)
        now: Reference instant, defaults to the current local time
        settings: Billing settings, defaults to the global instance

    Raises:
        ValueError: If time_range is not a known range
    """
    time_range = TimeRange(time_range)
    now = as_instant(now or datetime.now())
    settings = settings or billing_settings

    if time_range == TimeRange.MONTH:
        last_day = calendar.monthrange(now.year, now.month)[1]
        return DateWindow(
            start=datetime(now.year, now.month, 1),
            end=datetime.combine(date(now.year, now.month, last_day), time.max),
        )

    if time_range == TimeRange.YEAR:
        return DateWindow(
            start=datetime(now.year, 1, 1),
            end=datetime.combine(date(now.year, 12, 31), time.max),
        )

    return window_between(settings.all_time_start, settings.all_time_end)


def in_window(payment: InstallmentPayment, window: DateWindow) -> bool:
    return window.contains(as_instant(payment.effective_date))


def payments_in_window(
    payments: Iterable[InstallmentPayment],
    window: DateWindow,
) -> List[InstallmentPayment]:
    """Payments whose effective date lies inside ``window``, in input order."""
    return [p for p in payments if in_window(p, window)]
