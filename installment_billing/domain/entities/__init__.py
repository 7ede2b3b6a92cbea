"""Domain Entities - Core business objects."""

from .payment import InstallmentPayment, PaymentStatus
from .plan import InstallmentPlan, PlanStatus
from .reminder import PaymentReminder, ReminderType

__all__ = [
    "InstallmentPayment",
    "PaymentStatus",
    "InstallmentPlan",
    "PlanStatus",
    "PaymentReminder",
    "ReminderType",
]
