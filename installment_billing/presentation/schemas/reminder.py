"""Reminder-related Pydantic schemas."""

from datetime import date

from pydantic import BaseModel, Field

from installment_billing.application.dto import ReminderDTO
from installment_billing.domain.entities import ReminderType


class GenerateRemindersRequestSchema(BaseModel):
    """Schema for POST /v1/payments/{payment_id}/reminders."""

    types: list[ReminderType] = Field(
        default_factory=lambda: [ReminderType.UPCOMING, ReminderType.DUE, ReminderType.OVERDUE],
        description="Reminder types to create",
    )


class ReminderSchema(BaseModel):
    reminder_id: str
    payment_id: str
    reminder_date: date
    reminder_type: ReminderType
    message: str
    sent: bool

    @classmethod
    def from_dto(cls, dto: ReminderDTO) -> "ReminderSchema":
        return cls(
            reminder_id=dto.reminder_id,
            payment_id=dto.payment_id,
            reminder_date=dto.reminder_date,
            reminder_type=dto.reminder_type,
            message=dto.message,
            sent=dto.sent,
        )


class SendRemindersResponseSchema(BaseModel):
    """Schema for POST /v1/reminders/send response."""

    attempted: int = Field(..., ge=0)
    sent: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)
