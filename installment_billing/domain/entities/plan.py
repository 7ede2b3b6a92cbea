"""Installment plan domain entity."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List
from uuid import UUID, uuid4

from .payment import InstallmentPayment, PaymentStatus


class PlanStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    DEFAULTED = "defaulted"


@dataclass
class InstallmentPlan:
    """
    A customer's agreement to pay a purchase off in monthly installments.

    The plan owns its payments. ``remaining_balance`` always equals
    ``total_amount - down_payment`` minus the amounts of paid payments;
    the ``apply_paid``/``release_paid`` pair keeps it that way when a
    payment moves into or out of the paid state.
    """

    customer_id: str
    total_amount: Decimal
    down_payment: Decimal
    term_months: int
    interest_rate: Decimal
    start_date: date
    end_date: date
    remaining_balance: Decimal
    status: PlanStatus = PlanStatus.ACTIVE
    customer_name: str | None = None
    notes: str = ""
    sale_id: str | None = None
    payments: List[InstallmentPayment] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def financed_amount(self) -> Decimal:
        return self.total_amount - self.down_payment

    @property
    def paid_amount(self) -> Decimal:
        return sum(
            (p.amount for p in self.payments if p.status == PaymentStatus.PAID),
            Decimal("0.00"),
        )

    def get_payment(self, payment_id: UUID) -> InstallmentPayment | None:
        for payment in self.payments:
            if payment.id == payment_id:
                return payment
        return None

    def apply_paid(self, amount: Decimal) -> None:
        """A payment of ``amount`` entered the paid state."""
        self.remaining_balance -= amount
        self.touch()

    def release_paid(self, amount: Decimal) -> None:
        """A payment of ``amount`` left the paid state."""
        self.remaining_balance += amount
        self.touch()

    def refresh_completion(self) -> None:
        """Move between active and completed as open payments come and go."""
        has_open = any(p.is_open for p in self.payments)

        if self.status == PlanStatus.ACTIVE and self.payments and not has_open:
            self.status = PlanStatus.COMPLETED
            self.touch()
        elif self.status == PlanStatus.COMPLETED and has_open:
            self.status = PlanStatus.ACTIVE
            self.touch()

    def cancel(self) -> None:
        """Cancel the plan and every payment still expecting money."""
        self.status = PlanStatus.CANCELLED
        for payment in self.payments:
            if payment.is_open:
                payment.mark_cancelled()
        self.touch()

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()

    def to_dict(self) -> dict:
        return {
            "plan_id": str(self.id),
            "customer_id": self.customer_id,
            "total_amount": str(self.total_amount),
            "down_payment": str(self.down_payment),
            "remaining_balance": str(self.remaining_balance),
            "term_months": self.term_months,
            "interest_rate": str(self.interest_rate),
            "status": self.status.value,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "payments": [p.to_dict() for p in self.payments],
            "created_at": self.created_at.isoformat() + "Z",
        }
