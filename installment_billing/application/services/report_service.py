"""Report service - dashboard summaries and date-range reports."""

from datetime import date, datetime
from typing import Callable

import structlog

from installment_billing.domain.interfaces import PaymentRepository, PlanRepository
from installment_billing.application.dto import ReportResponse, SummaryResponse
from installment_billing.service.billing import (
    BillingSettings,
    TimeRange,
    generate_report,
    resolve_window,
    summarize,
)

logger = structlog.get_logger(__name__)


class ReportService:
    """
    Application service for reporting use cases.

    Statuses are resolved with the effective-status rule as of the
    service clock, so a pending payment past its due date is reported as
    overdue even though it is stored as pending.
    """

    def __init__(
        self,
        plan_repository: PlanRepository,
        payment_repository: PaymentRepository,
        clock: Callable[[], datetime] = datetime.now,
        settings: BillingSettings | None = None,
    ):
        self._plan_repo = plan_repository
        self._payment_repo = payment_repository
        self._clock = clock
        self._settings = settings

    async def get_summary(self, time_range: TimeRange = TimeRange.MONTH) -> SummaryResponse:
        """
        Collection totals for the current month, current year or all time.

        Raises:
            ValueError: If time_range is not a known range
        """
        time_range = TimeRange(time_range)
        now = self._clock()

        payments = await self._payment_repo.list_all()
        plans = await self._plan_repo.list_plans()

        summary = summarize(
            payments,
            plans,
            time_range,
            now=now,
            as_of=now.date(),
            settings=self._settings,
        )
        window = resolve_window(time_range, now=now, settings=self._settings)

        logger.info(
            "summary_generated",
            time_range=time_range.value,
            payments=len(payments),
            total_collected=str(summary.total_collected),
            completion_rate=round(summary.completion_rate, 2),
        )

        return SummaryResponse.from_summary(
            summary,
            time_range=time_range.value,
            window_start=window.start,
            window_end=window.end,
        )

    async def get_report(self, start_date: date, end_date: date) -> ReportResponse:
        """
        Payments effective strictly between two dates, with totals.

        An inverted or empty range yields an empty report.
        """
        as_of = self._clock().date()
        payments = await self._payment_repo.list_all()
        report = generate_report(payments, start_date, end_date, as_of=as_of)

        logger.info(
            "report_generated",
            start_date=start_date.isoformat(),
            end_date=end_date.isoformat(),
            total_payments=report.summary.total_payments,
            delinquency_rate=round(report.summary.delinquency_rate, 2),
        )

        return ReportResponse.from_report(report, as_of)
