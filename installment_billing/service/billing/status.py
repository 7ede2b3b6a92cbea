"""
Effective payment status.

"Overdue" is never a stored transition made by the billing core: it is
derived by comparing a pending payment's due date to a reference date.
Every view that displays or aggregates a status goes through
``effective_status`` so the schedule, the summary and the report agree.
"""

from datetime import date, datetime
from typing import Iterable, List

from installment_billing.domain.entities import InstallmentPayment, PaymentStatus


def effective_status(payment: InstallmentPayment, as_of: date) -> PaymentStatus:
    """
    Resolve a payment's status as of a given date.

    A pending payment whose due date is strictly before ``as_of`` is
    overdue. Every other status is returned as stored.
    """
    if isinstance(as_of, datetime):
        as_of = as_of.date()

    if payment.status == PaymentStatus.PENDING and payment.due_date < as_of:
        return PaymentStatus.OVERDUE
    return payment.status


def is_overdue(payment: InstallmentPayment, as_of: date) -> bool:
    return effective_status(payment, as_of) == PaymentStatus.OVERDUE


def overdue_payments(
    payments: Iterable[InstallmentPayment],
    as_of: date,
) -> List[InstallmentPayment]:
    """Payments that are overdue as of ``as_of``, in input order."""
    return [p for p in payments if is_overdue(p, as_of)]
