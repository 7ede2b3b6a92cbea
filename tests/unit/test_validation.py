"""
Unit tests for request validation, settings and domain exceptions.
"""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from installment_billing.application.dto import (
    AddPaymentRequest,
    CreatePlanRequest,
    GenerateRemindersRequest,
    RecordPaymentRequest,
)
from installment_billing.domain.exceptions import (
    ExchangeRateAPIException,
    InvalidStatusTransitionException,
    PlanNotFoundException,
)
from installment_billing.service.billing import BillingSettings


def plan_request(**overrides) -> CreatePlanRequest:
    values = dict(
        customer_id="cust_1",
        total_amount=Decimal("10000"),
        down_payment=Decimal("1000"),
        term_months=6,
        interest_rate=Decimal("12"),
        start_date=date(2024, 1, 15),
    )
    values.update(overrides)
    return CreatePlanRequest(**values)


class TestCreatePlanRequest:

    def test_valid_request(self):
        assert plan_request().validate() == []

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"customer_id": "  "}, "customer_id is required"),
            ({"total_amount": Decimal("0")}, "total_amount must be positive"),
            ({"down_payment": Decimal("-1")}, "down_payment cannot be negative"),
            ({"down_payment": Decimal("10000")}, "down_payment must be less than total_amount"),
            ({"term_months": 0}, "term_months must be at least 1"),
            ({"interest_rate": Decimal("-0.5")}, "interest_rate cannot be negative"),
        ],
    )
    def test_invalid_fields(self, overrides, message):
        assert message in plan_request(**overrides).validate()

    def test_collects_every_error(self):
        errors = plan_request(customer_id="", term_months=0).validate()
        assert len(errors) == 2


class TestPaymentRequests:

    def test_record_amount_must_be_positive(self):
        assert RecordPaymentRequest(date(2024, 1, 1), amount=Decimal("0")).validate()
        assert RecordPaymentRequest(date(2024, 1, 1)).validate() == []

    def test_add_payment_amount_must_be_positive(self):
        assert AddPaymentRequest(Decimal("-5"), date(2024, 1, 1)).validate()

    def test_reminder_types_required(self):
        assert GenerateRemindersRequest(types=[]).validate()


class TestBillingSettings:

    def test_defaults(self):
        settings = BillingSettings()

        assert settings.upcoming_reminder_days == 3
        assert settings.overdue_reminder_days == 3
        assert settings.zero_decimal_currencies == frozenset({"JPY", "KRW"})

    def test_inverted_all_time_window_rejected(self):
        with pytest.raises(ValidationError):
            BillingSettings(all_time_start=date(2100, 1, 1), all_time_end=date(2000, 1, 1))

    def test_zero_decimal_csv_parsing(self):
        settings = BillingSettings(zero_decimal_currencies_csv=" jpy, ,vnd ")
        assert settings.zero_decimal_currencies == frozenset({"JPY", "VND"})


class TestDomainExceptions:

    def test_error_body(self):
        exc = PlanNotFoundException("abc")

        assert exc.to_dict("req-1") == {
            "error": "PLAN_NOT_FOUND",
            "message": "Plan not found: abc",
            "request_id": "req-1",
        }

    def test_transition_message(self):
        exc = InvalidStatusTransitionException("payment", "paid", "paid")
        assert exc.code == "INVALID_STATUS_TRANSITION"
        assert "from paid to paid" in exc.message

    def test_exchange_rate_status_code(self):
        assert ExchangeRateAPIException("down", status_code=502).status_code == 502
