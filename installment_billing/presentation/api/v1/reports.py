"""API endpoints for payment summaries and reports."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from installment_billing.application.services import ReportService
from installment_billing.core.dependencies import get_report_service
from installment_billing.presentation.schemas import (
    ReportResponseSchema,
    SummaryResponseSchema,
)
from installment_billing.service.billing import TimeRange

report_router = APIRouter(prefix="/reports")


@report_router.get(
    "/summary",
    response_model=SummaryResponseSchema,
    summary="Payment Summary",
    description="""
    Collected, pending and overdue totals for the current month, the
    current year or all time, plus the active plan count and the
    completion rate.
    """,
)
async def get_summary(
    report_service: Annotated[ReportService, Depends(get_report_service)],
    time_range: Annotated[
        TimeRange,
        Query(description="month, year or all"),
    ] = TimeRange.MONTH,
) -> SummaryResponseSchema:
    response = await report_service.get_summary(time_range)
    return SummaryResponseSchema.from_dto(response)


@report_router.get(
    "/payments",
    response_model=ReportResponseSchema,
    summary="Payment Report",
    description="""
    Payments effective strictly between start_date and end_date, sorted
    by due date, with totals and the delinquency rate.
    """,
)
async def get_report(
    report_service: Annotated[ReportService, Depends(get_report_service)],
    start_date: Annotated[date, Query(description="Range start (exclusive)")],
    end_date: Annotated[date, Query(description="Range end (exclusive)")],
) -> ReportResponseSchema:
    response = await report_service.get_report(start_date, end_date)
    return ReportResponseSchema.from_dto(response)
