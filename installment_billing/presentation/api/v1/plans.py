"""API endpoints for installment plans."""

from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, Response

from installment_billing.application.dto import CreatePlanRequest, UpdatePlanRequest
from installment_billing.application.services import PlanService
from installment_billing.core.dependencies import get_plan_service
from installment_billing.domain.entities import PlanStatus
from installment_billing.presentation.schemas import (
    CreatePlanRequestSchema,
    ErrorResponseSchema,
    PlanResponseSchema,
    SchedulePreviewResponseSchema,
    UpdatePlanRequestSchema,
)

plan_router = APIRouter(
    prefix="/plans",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Plan not found"},
    },
)

PlanId = Annotated[UUID, Path(description="UUID of the plan")]


def _to_dto(request: CreatePlanRequestSchema) -> CreatePlanRequest:
    return CreatePlanRequest(
        customer_id=request.customer_id,
        customer_name=request.customer_name,
        sale_id=request.sale_id,
        total_amount=request.total_amount,
        down_payment=request.down_payment,
        term_months=request.term_months,
        interest_rate=request.interest_rate,
        start_date=request.start_date,
        notes=request.notes,
    )


@plan_router.post(
    "",
    response_model=PlanResponseSchema,
    status_code=201,
    summary="Create Installment Plan",
    description="""
    Create an installment plan and its monthly payment schedule.

    Interest-bearing plans use a fixed annuity payment; the final
    payment absorbs rounding so the schedule sums to the financed amount.
    """,
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid plan request"},
    },
)
async def create_plan(
    request: CreatePlanRequestSchema,
    plan_service: Annotated[PlanService, Depends(get_plan_service)],
) -> PlanResponseSchema:
    response = await plan_service.create_plan(_to_dto(request))
    return PlanResponseSchema.from_dto(response)


@plan_router.post(
    "/schedule/preview",
    response_model=SchedulePreviewResponseSchema,
    summary="Preview Payment Schedule",
    description="Compute the schedule a plan would get without saving it.",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid plan request"},
    },
)
async def preview_schedule(
    request: CreatePlanRequestSchema,
    plan_service: Annotated[PlanService, Depends(get_plan_service)],
) -> SchedulePreviewResponseSchema:
    response = await plan_service.preview_schedule(_to_dto(request))
    return SchedulePreviewResponseSchema.from_dto(response)


@plan_router.get(
    "",
    response_model=list[PlanResponseSchema],
    summary="List Installment Plans",
    description="List plans, newest first, optionally filtered by customer or status.",
)
async def list_plans(
    plan_service: Annotated[PlanService, Depends(get_plan_service)],
    customer_id: Annotated[
        Optional[str],
        Query(min_length=1, max_length=255, description="Only this customer's plans"),
    ] = None,
    status: Annotated[
        Optional[PlanStatus],
        Query(description="Only plans in this status"),
    ] = None,
) -> list[PlanResponseSchema]:
    plans = await plan_service.list_plans(customer_id=customer_id, status=status)
    return [PlanResponseSchema.from_dto(p) for p in plans]


@plan_router.get(
    "/{plan_id}",
    response_model=PlanResponseSchema,
    summary="Get Installment Plan",
    description="""
    Retrieve a plan with its payments.

    Payment statuses are effective statuses: a pending payment whose due
    date has passed is reported as overdue.
    """,
)
async def get_plan(
    plan_id: PlanId,
    plan_service: Annotated[PlanService, Depends(get_plan_service)],
) -> PlanResponseSchema:
    response = await plan_service.get_plan(plan_id)
    return PlanResponseSchema.from_dto(response)


@plan_router.patch(
    "/{plan_id}",
    response_model=PlanResponseSchema,
    summary="Update Installment Plan",
    responses={
        409: {"model": ErrorResponseSchema, "description": "Invalid status transition"},
    },
)
async def update_plan(
    plan_id: PlanId,
    request: UpdatePlanRequestSchema,
    plan_service: Annotated[PlanService, Depends(get_plan_service)],
) -> PlanResponseSchema:
    response = await plan_service.update_plan(
        plan_id,
        UpdatePlanRequest(notes=request.notes, status=request.status),
    )
    return PlanResponseSchema.from_dto(response)


@plan_router.post(
    "/{plan_id}/cancel",
    response_model=PlanResponseSchema,
    summary="Cancel Installment Plan",
    description="Cancel the plan and every payment that is still pending or overdue.",
    responses={
        409: {"model": ErrorResponseSchema, "description": "Plan already cancelled"},
    },
)
async def cancel_plan(
    plan_id: PlanId,
    plan_service: Annotated[PlanService, Depends(get_plan_service)],
) -> PlanResponseSchema:
    response = await plan_service.cancel_plan(plan_id)
    return PlanResponseSchema.from_dto(response)


@plan_router.delete(
    "/{plan_id}",
    status_code=204,
    summary="Delete Installment Plan",
)
async def delete_plan(
    plan_id: PlanId,
    plan_service: Annotated[PlanService, Depends(get_plan_service)],
) -> Response:
    await plan_service.delete_plan(plan_id)
    return Response(status_code=204)
