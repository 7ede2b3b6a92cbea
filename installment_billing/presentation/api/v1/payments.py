"""API endpoints for installment payments."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path

from installment_billing.application.dto import (
    AddPaymentRequest,
    RecordPaymentRequest,
    UpdatePaymentStatusRequest,
)
from installment_billing.application.services import PaymentService
from installment_billing.core.dependencies import get_payment_service
from installment_billing.presentation.schemas import (
    AddPaymentRequestSchema,
    ErrorResponseSchema,
    PlanResponseSchema,
    RecordPaymentRequestSchema,
    UpdatePaymentStatusRequestSchema,
)

payment_router = APIRouter(
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid payment request"},
        404: {"model": ErrorResponseSchema, "description": "Payment or plan not found"},
    },
)

PaymentId = Annotated[UUID, Path(description="UUID of the payment")]


@payment_router.post(
    "/payments/{payment_id}/record",
    response_model=PlanResponseSchema,
    summary="Record Payment",
    description="""
    Mark a payment as paid and return the updated plan.

    The recorded amount comes off the remaining balance. The plan is
    completed once no pending or overdue payments remain.
    """,
    responses={
        409: {"model": ErrorResponseSchema, "description": "Payment already paid or cancelled"},
    },
)
async def record_payment(
    payment_id: PaymentId,
    request: RecordPaymentRequestSchema,
    payment_service: Annotated[PaymentService, Depends(get_payment_service)],
) -> PlanResponseSchema:
    response = await payment_service.record_payment(
        payment_id,
        RecordPaymentRequest(
            payment_date=request.payment_date,
            payment_method=request.payment_method,
            notes=request.notes,
            amount=request.amount,
        ),
    )
    return PlanResponseSchema.from_dto(response)


@payment_router.patch(
    "/payments/{payment_id}/status",
    response_model=PlanResponseSchema,
    summary="Change Payment Status",
    responses={
        409: {"model": ErrorResponseSchema, "description": "Plan is cancelled"},
    },
)
async def update_payment_status(
    payment_id: PaymentId,
    request: UpdatePaymentStatusRequestSchema,
    payment_service: Annotated[PaymentService, Depends(get_payment_service)],
) -> PlanResponseSchema:
    response = await payment_service.update_payment_status(
        payment_id,
        UpdatePaymentStatusRequest(
            status=request.status,
            payment_date=request.payment_date,
        ),
    )
    return PlanResponseSchema.from_dto(response)


@payment_router.delete(
    "/payments/{payment_id}",
    response_model=PlanResponseSchema,
    summary="Delete Payment",
    description="Remove a payment from its plan and return the updated plan.",
)
async def delete_payment(
    payment_id: PaymentId,
    payment_service: Annotated[PaymentService, Depends(get_payment_service)],
) -> PlanResponseSchema:
    response = await payment_service.delete_payment(payment_id)
    return PlanResponseSchema.from_dto(response)


@payment_router.post(
    "/plans/{plan_id}/payments",
    response_model=PlanResponseSchema,
    status_code=201,
    summary="Add Payment",
    description="Add an ad-hoc pending payment to a plan.",
)
async def add_payment(
    plan_id: Annotated[UUID, Path(description="UUID of the plan")],
    request: AddPaymentRequestSchema,
    payment_service: Annotated[PaymentService, Depends(get_payment_service)],
) -> PlanResponseSchema:
    response = await payment_service.add_payment(
        plan_id,
        AddPaymentRequest(
            amount=request.amount,
            due_date=request.due_date,
            notes=request.notes,
        ),
    )
    return PlanResponseSchema.from_dto(response)
