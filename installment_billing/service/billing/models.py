"""
Derived reporting models.

Summaries and reports are computed from snapshots of plans and payments
and are never persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List

from installment_billing.domain.entities import InstallmentPayment


@dataclass(frozen=True)
class PaymentSummary:
    """
    Collection totals for a reporting window.

    Attributes:
        total_collected: Sum of paid amounts in the window
        total_pending: Sum of pending amounts in the window
        total_overdue: Sum of overdue amounts in the window
        active_plan_count: Plans currently active (window independent)
        completion_rate: Paid payments / all payments in window, 0-100
    """

    total_collected: Decimal
    total_pending: Decimal
    total_overdue: Decimal
    active_plan_count: int
    completion_rate: float

    def to_dict(self) -> dict:
        return {
            "total_collected": str(self.total_collected),
            "total_pending": str(self.total_pending),
            "total_overdue": str(self.total_overdue),
            "active_plan_count": self.active_plan_count,
            "completion_rate": round(self.completion_rate, 2),
        }


@dataclass(frozen=True)
class ReportSummary:
    """Totals block of a payment report."""

    total_payments: int
    total_amount: Decimal
    paid_amount: Decimal
    pending_amount: Decimal
    overdue_amount: Decimal
    delinquency_rate: float


@dataclass(frozen=True)
class PaymentReport:
    """
    Payments matching a date range plus their summary.

    ``payments`` keeps the order it was given in; display code sorts.
    """

    start_date: datetime
    end_date: datetime
    summary: ReportSummary
    payments: List[InstallmentPayment] = field(default_factory=list)
