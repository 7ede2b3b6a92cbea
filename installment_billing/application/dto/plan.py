"""Data transfer objects for installment plan operations."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

from installment_billing.domain.entities import (
    InstallmentPayment,
    InstallmentPlan,
    PlanStatus,
)
from installment_billing.service.billing import effective_status, to_money


@dataclass(frozen=True)
class CreatePlanRequest:
    """Input data for creating (or previewing) an installment plan."""

    customer_id: str
    total_amount: Decimal
    term_months: int
    start_date: date
    down_payment: Decimal = Decimal("0")
    interest_rate: Decimal = Decimal("0")
    customer_name: Optional[str] = None
    notes: str = ""
    sale_id: Optional[str] = None

    def validate(self) -> List[str]:
        """Amount rules apply to the cent-rounded values a plan stores."""
        errors = []
        total = to_money(self.total_amount)
        down = to_money(self.down_payment)

        if not self.customer_id or not self.customer_id.strip():
            errors.append("customer_id is required")

        if total <= 0:
            errors.append("total_amount must be positive")

        if down < 0:
            errors.append("down_payment cannot be negative")
        elif down >= total:
            errors.append("down_payment must be less than total_amount")

        if self.term_months < 1:
            errors.append("term_months must be at least 1")

        if self.interest_rate < 0:
            errors.append("interest_rate cannot be negative")

        return errors


@dataclass(frozen=True)
class UpdatePlanRequest:
    """Editable plan fields; None leaves a field unchanged."""

    notes: Optional[str] = None
    status: Optional[PlanStatus] = None


@dataclass(frozen=True)
class PaymentDTO:
    """
    A payment as shown to callers.

    ``status`` is the effective status as of the response date;
    ``stored_status`` is what the database holds.
    """

    payment_id: str
    plan_id: Optional[str]
    amount: Decimal
    due_date: date
    status: str
    stored_status: str
    payment_date: Optional[date] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_entity(cls, payment: InstallmentPayment, as_of: date) -> "PaymentDTO":
        return cls(
            payment_id=str(payment.id),
            plan_id=str(payment.plan_id) if payment.plan_id else None,
            amount=payment.amount,
            due_date=payment.due_date,
            status=effective_status(payment, as_of).value,
            stored_status=payment.status.value,
            payment_date=payment.payment_date,
            payment_method=payment.payment_method,
            notes=payment.notes,
        )


@dataclass(frozen=True)
class PlanResponse:
    """Response data for an installment plan with its payments."""

    plan_id: str
    customer_id: str
    customer_name: Optional[str]
    sale_id: Optional[str]
    total_amount: Decimal
    down_payment: Decimal
    remaining_balance: Decimal
    paid_amount: Decimal
    term_months: int
    interest_rate: Decimal
    status: str
    start_date: date
    end_date: date
    notes: str
    payments: List[PaymentDTO] = field(default_factory=list)

    @classmethod
    def from_entity(cls, plan: InstallmentPlan, as_of: date) -> "PlanResponse":
        payments = sorted(plan.payments, key=lambda p: p.due_date)
        return cls(
            plan_id=str(plan.id),
            customer_id=plan.customer_id,
            customer_name=plan.customer_name,
            sale_id=plan.sale_id,
            total_amount=plan.total_amount,
            down_payment=plan.down_payment,
            remaining_balance=plan.remaining_balance,
            paid_amount=plan.paid_amount,
            term_months=plan.term_months,
            interest_rate=plan.interest_rate,
            status=plan.status.value,
            start_date=plan.start_date,
            end_date=plan.end_date,
            notes=plan.notes,
            payments=[PaymentDTO.from_entity(p, as_of) for p in payments],
        )


@dataclass(frozen=True)
class SchedulePreviewResponse:
    """An unsaved schedule with its headline numbers."""

    financed_amount: Decimal
    monthly_payment: Decimal
    total_payable: Decimal
    end_date: date
    payments: List[PaymentDTO] = field(default_factory=list)
