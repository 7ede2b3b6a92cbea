"""Repository implementations."""

from .plan_repository import PostgresPlanRepository
from .payment_repository import PostgresPaymentRepository
from .reminder_repository import PostgresReminderRepository

__all__ = [
    "PostgresPlanRepository",
    "PostgresPaymentRepository",
    "PostgresReminderRepository",
]
