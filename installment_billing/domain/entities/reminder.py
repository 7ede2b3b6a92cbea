"""Payment reminder domain entity."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from uuid import UUID, uuid4


class ReminderType(str, Enum):
    UPCOMING = "upcoming"
    DUE = "due"
    OVERDUE = "overdue"


@dataclass
class PaymentReminder:
    """
    A notification scheduled for an installment payment.

    Reminders are created in batches next to a payment and only ever
    change by flipping ``sent``.
    """

    payment_id: UUID
    reminder_date: date
    reminder_type: ReminderType
    message: str
    id: UUID = field(default_factory=uuid4)
    sent: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)

    def mark_sent(self) -> None:
        self.sent = True

    def to_dict(self) -> dict:
        return {
            "reminder_id": str(self.id),
            "payment_id": str(self.payment_id),
            "reminder_date": self.reminder_date.isoformat(),
            "reminder_type": self.reminder_type.value,
            "message": self.message,
            "sent": self.sent,
        }
