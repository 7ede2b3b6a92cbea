"""API endpoints for payment reminders."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Response

from installment_billing.application.dto import GenerateRemindersRequest
from installment_billing.application.services import ReminderService
from installment_billing.core.dependencies import get_reminder_service
from installment_billing.presentation.schemas import (
    ErrorResponseSchema,
    GenerateRemindersRequestSchema,
    ReminderSchema,
    SendRemindersResponseSchema,
)

reminder_router = APIRouter()

PaymentId = Annotated[UUID, Path(description="UUID of the payment")]


@reminder_router.post(
    "/payments/{payment_id}/reminders",
    response_model=list[ReminderSchema],
    status_code=201,
    summary="Generate Reminders",
    description="""
    Create upcoming, due and overdue reminders for a payment.

    Upcoming and due reminders whose date has already passed are skipped.
    """,
    responses={
        400: {"model": ErrorResponseSchema, "description": "No reminder types"},
        404: {"model": ErrorResponseSchema, "description": "Payment not found"},
    },
)
async def generate_reminders(
    payment_id: PaymentId,
    request: GenerateRemindersRequestSchema,
    reminder_service: Annotated[ReminderService, Depends(get_reminder_service)],
) -> list[ReminderSchema]:
    reminders = await reminder_service.generate_reminders(
        payment_id,
        GenerateRemindersRequest(types=list(request.types)),
    )
    return [ReminderSchema.from_dto(r) for r in reminders]


@reminder_router.get(
    "/payments/{payment_id}/reminders",
    response_model=list[ReminderSchema],
    summary="List Reminders",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Payment not found"},
    },
)
async def list_reminders(
    payment_id: PaymentId,
    reminder_service: Annotated[ReminderService, Depends(get_reminder_service)],
) -> list[ReminderSchema]:
    reminders = await reminder_service.list_reminders(payment_id)
    return [ReminderSchema.from_dto(r) for r in reminders]


@reminder_router.post(
    "/reminders/send",
    response_model=SendRemindersResponseSchema,
    summary="Send Due Reminders",
    description="Deliver every unsent reminder dated today or earlier.",
)
async def send_due_reminders(
    reminder_service: Annotated[ReminderService, Depends(get_reminder_service)],
) -> SendRemindersResponseSchema:
    result = await reminder_service.send_due_reminders()
    return SendRemindersResponseSchema(
        attempted=result.attempted,
        sent=result.sent,
        failed=result.failed,
    )


@reminder_router.delete(
    "/reminders/{reminder_id}",
    status_code=204,
    summary="Delete Reminder",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Reminder not found"},
    },
)
async def delete_reminder(
    reminder_id: Annotated[UUID, Path(description="UUID of the reminder")],
    reminder_service: Annotated[ReminderService, Depends(get_reminder_service)],
) -> Response:
    await reminder_service.delete_reminder(reminder_id)
    return Response(status_code=204)
