"""Data transfer objects for summaries and reports."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import List

from installment_billing.service.billing import PaymentReport, PaymentSummary

from .plan import PaymentDTO


@dataclass(frozen=True)
class SummaryResponse:
    time_range: str
    window_start: datetime
    window_end: datetime
    total_collected: Decimal
    total_pending: Decimal
    total_overdue: Decimal
    active_plan_count: int
    completion_rate: float

    @classmethod
    def from_summary(
        cls,
        summary: PaymentSummary,
        time_range: str,
        window_start: datetime,
        window_end: datetime,
    ) -> "SummaryResponse":
        return cls(
            time_range=time_range,
            window_start=window_start,
            window_end=window_end,
            total_collected=summary.total_collected,
            total_pending=summary.total_pending,
            total_overdue=summary.total_overdue,
            active_plan_count=summary.active_plan_count,
            completion_rate=round(summary.completion_rate, 2),
        )


@dataclass(frozen=True)
class ReportResponse:
    """A payment report with payments sorted by due date for display."""

    start_date: datetime
    end_date: datetime
    total_payments: int
    total_amount: Decimal
    paid_amount: Decimal
    pending_amount: Decimal
    overdue_amount: Decimal
    delinquency_rate: float
    payments: List[PaymentDTO] = field(default_factory=list)

    @classmethod
    def from_report(cls, report: PaymentReport, as_of: date) -> "ReportResponse":
        summary = report.summary
        ordered = sorted(report.payments, key=lambda p: p.due_date)
        return cls(
            start_date=report.start_date,
            end_date=report.end_date,
            total_payments=summary.total_payments,
            total_amount=summary.total_amount,
            paid_amount=summary.paid_amount,
            pending_amount=summary.pending_amount,
            overdue_amount=summary.overdue_amount,
            delinquency_rate=round(summary.delinquency_rate, 2),
            payments=[PaymentDTO.from_entity(p, as_of) for p in ordered],
        )
