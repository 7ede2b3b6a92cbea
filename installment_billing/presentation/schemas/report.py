"""Report-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from installment_billing.application.dto import ReportResponse, SummaryResponse

from .plan import PaymentSchema


class SummaryResponseSchema(BaseModel):
    """Schema for GET /v1/reports/summary."""

    time_range: str
    window_start: datetime
    window_end: datetime
    total_collected: float
    total_pending: float
    total_overdue: float
    active_plan_count: int
    completion_rate: float = Field(..., ge=0, le=100)

    @classmethod
    def from_dto(cls, dto: SummaryResponse) -> "SummaryResponseSchema":
        return cls(
            time_range=dto.time_range,
            window_start=dto.window_start,
            window_end=dto.window_end,
            total_collected=float(dto.total_collected),
            total_pending=float(dto.total_pending),
            total_overdue=float(dto.total_overdue),
            active_plan_count=dto.active_plan_count,
            completion_rate=dto.completion_rate,
        )


class ReportSummarySchema(BaseModel):
    total_payments: int
    total_amount: float
    paid_amount: float
    pending_amount: float
    overdue_amount: float
    delinquency_rate: float = Field(..., ge=0, le=100)


class ReportResponseSchema(BaseModel):
    """Schema for GET /v1/reports/payments."""

    start_date: datetime
    end_date: datetime
    summary: ReportSummarySchema
    payments: list[PaymentSchema]

    @classmethod
    def from_dto(cls, dto: ReportResponse) -> "ReportResponseSchema":
        return cls(
            start_date=dto.start_date,
            end_date=dto.end_date,
            summary=ReportSummarySchema(
                total_payments=dto.total_payments,
                total_amount=float(dto.total_amount),
                paid_amount=float(dto.paid_amount),
                pending_amount=float(dto.pending_amount),
                overdue_amount=float(dto.overdue_amount),
                delinquency_rate=dto.delinquency_rate,
            ),
            payments=[PaymentSchema.from_dto(p) for p in dto.payments],
        )
