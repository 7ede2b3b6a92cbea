"""Data transfer objects for payment reminders."""

from dataclasses import dataclass
from datetime import date
from typing import List

from installment_billing.domain.entities import PaymentReminder, ReminderType


@dataclass(frozen=True)
class GenerateRemindersRequest:
    types: List[ReminderType]

    def validate(self) -> List[str]:
        errors = []

        if not self.types:
            errors.append("at least one reminder type is required")

        return errors


@dataclass(frozen=True)
class ReminderDTO:
    reminder_id: str
    payment_id: str
    reminder_date: date
    reminder_type: str
    message: str
    sent: bool

    @classmethod
    def from_entity(cls, reminder: PaymentReminder) -> "ReminderDTO":
        return cls(
            reminder_id=str(reminder.id),
            payment_id=str(reminder.payment_id),
            reminder_date=reminder.reminder_date,
            reminder_type=reminder.reminder_type.value,
            message=reminder.message,
            sent=reminder.sent,
        )


@dataclass(frozen=True)
class SendRemindersResponse:
    """Outcome of one delivery run."""

    attempted: int
    sent: int
    failed: int
