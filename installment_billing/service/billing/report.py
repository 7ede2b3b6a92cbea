"""
Payment Report Generation.

Selects payments whose effective date lies strictly between two dates and
summarizes them, including the delinquency rate.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Iterable

from installment_billing.domain.entities import InstallmentPayment, PaymentStatus

from .models import PaymentReport, ReportSummary
from .money import ZERO, percentage
from .summary import count_with_status, totals_by_status
from .windows import payments_in_window, window_between


def generate_report(
    payments: Iterable[InstallmentPayment],
    start_date: date | datetime,
    end_date: date | datetime,
    *,
    as_of: date | None = None,
) -> PaymentReport:
    """
    Build a payment report for an explicit date range.

    Matching uses the same open-interval rule as the summary: dates are
    taken at midnight, so payments effective exactly on ``start_date`` or
    ``end_date`` are excluded.

    delinquency_rate = overdue count / matched count * 100, 0 when nothing
    matches.

    Args:
        payments: Snapshot of payment records
        start_date: Range start (exclusive)
        end_date: Range end (exclusive)
        as_of: When set, statuses are resolved with effective_status

    Returns:
        PaymentReport with the matched payments in input order
    """
    window = window_between(start_date, end_date)
    matched = payments_in_window(payments, window)

    totals = totals_by_status(matched, as_of)
    overdue_count = count_with_status(matched, PaymentStatus.OVERDUE, as_of)
    total_amount = sum((p.amount for p in matched), Decimal(ZERO))

    summary = ReportSummary(
        total_payments=len(matched),
        total_amount=total_amount,
        paid_amount=totals[PaymentStatus.PAID],
        pending_amount=totals[PaymentStatus.PENDING],
        overdue_amount=totals[PaymentStatus.OVERDUE],
        delinquency_rate=percentage(overdue_count, len(matched)),
    )

    return PaymentReport(
        start_date=window.start,
        end_date=window.end,
        summary=summary,
        payments=matched,
    )
