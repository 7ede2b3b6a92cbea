"""
Payment Summary Aggregation.

Buckets payments in a named time window by status and derives the
collection totals shown on the installments dashboard.
"""

from collections import defaultdict
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Iterable, List

from installment_billing.domain.entities import (
    InstallmentPayment,
    InstallmentPlan,
    PaymentStatus,
    PlanStatus,
)

from .models import PaymentSummary
from .money import ZERO, percentage
from .settings import BillingSettings
from .status import effective_status
from .windows import TimeRange, payments_in_window, resolve_window


def resolve_status(payment: InstallmentPayment, as_of: date | None) -> PaymentStatus:
    """Stored status, or the effective status when a reference date is given."""
    if as_of is None:
        return payment.status
    return effective_status(payment, as_of)


def totals_by_status(
    payments: Iterable[InstallmentPayment],
    as_of: date | None = None,
) -> Dict[PaymentStatus, Decimal]:
    """Sum payment amounts per status. Every status is present in the result."""
    totals: Dict[PaymentStatus, Decimal] = defaultdict(lambda: ZERO)
    for payment in payments:
        status = resolve_status(payment, as_of)
        totals[status] = totals[status] + payment.amount
    return {status: totals[status] for status in PaymentStatus}


def count_with_status(
    payments: Iterable[InstallmentPayment],
    status: PaymentStatus,
    as_of: date | None = None,
) -> int:
    return sum(1 for p in payments if resolve_status(p, as_of) == status)


def summarize(
    payments: Iterable[InstallmentPayment],
    plans: Iterable[InstallmentPlan],
    time_range: TimeRange | str = TimeRange.MONTH,
    *,
    now: datetime | None = None,
    as_of: date | None = None,
    settings: BillingSettings | None = None,
) -> PaymentSummary:
    """
    Summarize payments for a named time window.

    Algorithm:
        1. Resolve the window (current month, current year, or all time)
        2. Keep payments whose effective date falls strictly inside it
        3. Sum amounts by status: paid -> collected, pending, overdue
        4. Count active plans (independent of the window)
        5. completion_rate = paid count / included count * 100

    Edge Cases:
        - No payments in window: all totals 0, completion_rate 0
        - Cancelled payments count toward the completion denominator
          but toward no amount bucket

    Args:
        payments: Snapshot of payment records
        plans: Snapshot of plans, used only for the active count
        time_range: "month", "year" or "all"
        now: Reference instant for the window, defaults to now
        as_of: When set, statuses are resolved with effective_status
        settings: Billing settings for the all-time window

    Returns:
        PaymentSummary for the window
    """
    window = resolve_window(time_range, now=now, settings=settings)
    included: List[InstallmentPayment] = payments_in_window(payments, window)

    totals = totals_by_status(included, as_of)
    paid_count = count_with_status(included, PaymentStatus.PAID, as_of)
    active_plans = sum(1 for plan in plans if plan.status == PlanStatus.ACTIVE)

    return PaymentSummary(
        total_collected=totals[PaymentStatus.PAID],
        total_pending=totals[PaymentStatus.PENDING],
        total_overdue=totals[PaymentStatus.OVERDUE],
        active_plan_count=active_plans,
        completion_rate=percentage(paid_count, len(included)),
    )
