"""
Unit tests for the payment summary aggregator and report generator.

A shared snapshot is evaluated as of 2024-03-15:
- 500.00 paid on 2024-03-05          -> collected (March)
- 300.00 pending, due 2024-03-20     -> pending (March)
- 200.00 pending, due 2024-03-10     -> overdue as of 03-15 (March)
- 100.00 cancelled, due 2024-03-12   -> no bucket, counts in denominator
- 999.00 paid on 2024-02-10          -> outside March, inside 2024
- 50.00 pending, due 2024-03-01      -> on the window start, excluded from March
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from installment_billing.domain.entities import (
    InstallmentPayment,
    InstallmentPlan,
    PaymentStatus,
    PlanStatus,
)
from installment_billing.service.billing import TimeRange, generate_report, summarize
from installment_billing.service.billing.summary import totals_by_status

NOW = datetime(2024, 3, 15, 9, 30)
TODAY = NOW.date()


def payment(amount: str, due: date, status=PaymentStatus.PENDING, paid_on=None):
    return InstallmentPayment(
        amount=Decimal(amount),
        due_date=due,
        status=status,
        payment_date=paid_on,
    )


def plan(status: PlanStatus) -> InstallmentPlan:
    return InstallmentPlan(
        customer_id="cust_1",
        total_amount=Decimal("1000.00"),
        down_payment=Decimal("0.00"),
        term_months=2,
        interest_rate=Decimal("0"),
        start_date=date(2024, 1, 1),
        end_date=date(2024, 3, 1),
        remaining_balance=Decimal("1000.00"),
        status=status,
    )


@pytest.fixture
def snapshot() -> list[InstallmentPayment]:
    return [
        payment("500.00", date(2024, 3, 1), PaymentStatus.PAID, date(2024, 3, 5)),
        payment("300.00", date(2024, 3, 20)),
        payment("200.00", date(2024, 3, 10)),
        payment("100.00", date(2024, 3, 12), PaymentStatus.CANCELLED),
        payment("999.00", date(2024, 2, 1), PaymentStatus.PAID, date(2024, 2, 10)),
        payment("50.00", date(2024, 3, 1)),
    ]


@pytest.fixture
def plans() -> list[InstallmentPlan]:
    return [plan(PlanStatus.ACTIVE), plan(PlanStatus.ACTIVE), plan(PlanStatus.COMPLETED)]


# =============================================================================
# Summary Tests
# =============================================================================

class TestSummarize:
    """Tests for summarize()."""

    def test_month_summary_with_effective_status(self, snapshot, plans):
        summary = summarize(snapshot, plans, TimeRange.MONTH, now=NOW, as_of=TODAY)

        assert summary.total_collected == Decimal("500.00")
        assert summary.total_pending == Decimal("300.00")
        assert summary.total_overdue == Decimal("200.00")
        assert summary.active_plan_count == 2
        # 1 paid out of 4 included (cancelled counts in the denominator)
        assert summary.completion_rate == pytest.approx(25.0)

    def test_month_summary_with_stored_status(self, snapshot, plans):
        summary = summarize(snapshot, plans, TimeRange.MONTH, now=NOW)

        assert summary.total_pending == Decimal("500.00")
        assert summary.total_overdue == Decimal("0")

    def test_year_summary_includes_earlier_months(self, snapshot, plans):
        summary = summarize(snapshot, plans, TimeRange.YEAR, now=NOW, as_of=TODAY)

        assert summary.total_collected == Decimal("1499.00")
        # 50.00 due 03-01 is now inside the window and past due
        assert summary.total_overdue == Decimal("250.00")
        assert summary.completion_rate == pytest.approx(2 / 6 * 100)

    def test_empty_window_has_zero_totals(self, plans):
        summary = summarize([], plans, TimeRange.MONTH, now=NOW)

        assert summary.total_collected == Decimal("0")
        assert summary.total_pending == Decimal("0")
        assert summary.total_overdue == Decimal("0")
        assert summary.completion_rate == 0.0
        assert summary.active_plan_count == 2

    def test_active_count_ignores_window(self, plans):
        summary = summarize([], plans, TimeRange.ALL, now=NOW)
        assert summary.active_plan_count == 2

    def test_totals_by_status_has_every_status(self):
        totals = totals_by_status([])
        assert set(totals) == set(PaymentStatus)

    def test_to_dict_rounds_rate(self, snapshot, plans):
        summary = summarize(snapshot, plans, TimeRange.YEAR, now=NOW, as_of=TODAY)
        assert summary.to_dict()["completion_rate"] == 33.33


# =============================================================================
# Report Tests
# =============================================================================

class TestGenerateReport:
    """Tests for generate_report()."""

    def test_march_report(self, snapshot):
        report = generate_report(snapshot, date(2024, 3, 1), date(2024, 3, 31), as_of=TODAY)

        assert report.summary.total_payments == 4
        assert report.summary.total_amount == Decimal("1100.00")
        assert report.summary.paid_amount == Decimal("500.00")
        assert report.summary.pending_amount == Decimal("300.00")
        assert report.summary.overdue_amount == Decimal("200.00")
        assert report.summary.delinquency_rate == pytest.approx(25.0)

    def test_report_keeps_input_order(self, snapshot):
        report = generate_report(snapshot, date(2024, 3, 1), date(2024, 3, 31))
        assert report.payments == snapshot[:4]

    def test_report_window_is_midnight_bounds(self, snapshot):
        report = generate_report(snapshot, date(2024, 3, 1), date(2024, 3, 31))

        assert report.start_date == datetime(2024, 3, 1)
        assert report.end_date == datetime(2024, 3, 31)

    def test_inverted_range_is_empty(self, snapshot):
        report = generate_report(snapshot, date(2024, 4, 1), date(2024, 3, 1))

        assert report.payments == []
        assert report.summary.total_payments == 0
        assert report.summary.delinquency_rate == 0.0

    def test_amount_totals_are_consistent(self, snapshot):
        report = generate_report(snapshot, date(2024, 1, 1), date(2024, 12, 31), as_of=TODAY)
        s = report.summary
        cancelled = sum(
            (p.amount for p in report.payments if p.status == PaymentStatus.CANCELLED),
            Decimal("0"),
        )

        assert s.paid_amount + s.pending_amount + s.overdue_amount + cancelled == s.total_amount
