"""Reminder-related domain exceptions."""

from .base import DomainException


class ReminderNotFoundException(DomainException):
    """Raised when a payment reminder cannot be found."""

    def __init__(self, reminder_id: str):
        super().__init__(
            message=f"Reminder not found: {reminder_id}",
            code="REMINDER_NOT_FOUND",
        )
        self.reminder_id = reminder_id
