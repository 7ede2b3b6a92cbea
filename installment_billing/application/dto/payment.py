"""Data transfer objects for payment operations."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Optional

from installment_billing.domain.entities import PaymentStatus


@dataclass(frozen=True)
class RecordPaymentRequest:
    """Input data for recording a received payment."""

    payment_date: date
    payment_method: Optional[str] = None
    notes: Optional[str] = None
    amount: Optional[Decimal] = None

    def validate(self) -> List[str]:
        errors = []

        if self.amount is not None and self.amount <= 0:
            errors.append("amount must be positive")

        return errors


@dataclass(frozen=True)
class UpdatePaymentStatusRequest:
    status: PaymentStatus
    payment_date: Optional[date] = None


@dataclass(frozen=True)
class AddPaymentRequest:
    """Input data for adding an ad-hoc payment to a plan."""

    amount: Decimal
    due_date: date
    notes: Optional[str] = None

    def validate(self) -> List[str]:
        errors = []

        if self.amount <= 0:
            errors.append("amount must be positive")

        return errors
