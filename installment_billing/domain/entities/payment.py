"""Installment payment domain entity."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID, uuid4


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


@dataclass
class InstallmentPayment:
    """A single scheduled payment within an installment plan.

    ``plan_id`` is None for schedules that have not been attached to a
    persisted plan yet (previews).
    """

    amount: Decimal
    due_date: date
    plan_id: UUID | None = None
    id: UUID = field(default_factory=uuid4)
    status: PaymentStatus = PaymentStatus.PENDING
    payment_date: date | None = None
    payment_method: str | None = None
    notes: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def effective_date(self) -> date:
        """Date used for reporting windows: paid date, else due date."""
        return self.payment_date or self.due_date

    @property
    def is_paid(self) -> bool:
        return self.status == PaymentStatus.PAID

    @property
    def is_open(self) -> bool:
        """True while the payment still expects money."""
        return self.status in (PaymentStatus.PENDING, PaymentStatus.OVERDUE)

    def mark_paid(
        self,
        payment_date: date,
        payment_method: str | None = None,
        notes: str | None = None,
        amount: Decimal | None = None,
    ) -> None:
        """Record the payment as received."""
        if amount is not None:
            self.amount = amount
        self.status = PaymentStatus.PAID
        self.payment_date = payment_date
        if payment_method is not None:
            self.payment_method = payment_method
        if notes is not None:
            self.notes = notes

    def mark_cancelled(self) -> None:
        self.status = PaymentStatus.CANCELLED

    def to_dict(self) -> dict:
        return {
            "payment_id": str(self.id),
            "plan_id": str(self.plan_id) if self.plan_id else None,
            "amount": str(self.amount),
            "due_date": self.due_date.isoformat(),
            "payment_date": self.payment_date.isoformat() if self.payment_date else None,
            "status": self.status.value,
            "payment_method": self.payment_method,
        }
