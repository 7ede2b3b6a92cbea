"""Plan-related Pydantic schemas."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from installment_billing.application.dto import (
    PaymentDTO,
    PlanResponse,
    SchedulePreviewResponse,
)
from installment_billing.domain.entities import PaymentStatus, PlanStatus

# Fifty years of monthly payments
MAX_TERM_MONTHS = 600


class CreatePlanRequestSchema(BaseModel):
    """Schema for POST /v1/plans and /v1/plans/schedule/preview."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "customer_id": "cust_1001",
                    "customer_name": "Maria Santos",
                    "total_amount": 10000,
                    "down_payment": 1000,
                    "term_months": 6,
                    "interest_rate": 12,
                    "start_date": "2024-01-15",
                }
            ]
        }
    )

    customer_id: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Customer the plan belongs to",
    )
    customer_name: Optional[str] = Field(None, max_length=255)
    sale_id: Optional[str] = Field(None, max_length=255)
    total_amount: Decimal = Field(..., description="Sale total in the base currency")
    down_payment: Decimal = Field(Decimal("0"), description="Amount paid up front")
    term_months: int = Field(
        ...,
        le=MAX_TERM_MONTHS,
        description="Number of monthly installments",
    )
    interest_rate: Decimal = Field(
        Decimal("0"),
        description="Annual interest rate in percent (0 for interest-free)",
    )
    start_date: date = Field(..., description="First payment is due one month later")
    notes: str = Field("", max_length=2000)

    @field_validator("customer_id")
    @classmethod
    def validate_customer_id(cls, v: str) -> str:
        """Ensure customer_id is not just whitespace."""
        if not v.strip():
            raise ValueError("customer_id cannot be empty or whitespace")
        return v.strip()


class UpdatePlanRequestSchema(BaseModel):
    """Schema for PATCH /v1/plans/{plan_id}."""

    notes: Optional[str] = Field(None, max_length=2000)
    status: Optional[PlanStatus] = None


class PaymentSchema(BaseModel):
    """A payment inside a plan response."""

    payment_id: str
    plan_id: Optional[str] = None
    amount: float = Field(..., examples=[1552.94])
    due_date: date
    status: PaymentStatus = Field(
        ...,
        description="Effective status: pending payments past due show as overdue",
    )
    stored_status: PaymentStatus
    payment_date: Optional[date] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_dto(cls, dto: PaymentDTO) -> "PaymentSchema":
        return cls(
            payment_id=dto.payment_id,
            plan_id=dto.plan_id,
            amount=float(dto.amount),
            due_date=dto.due_date,
            status=dto.status,
            stored_status=dto.stored_status,
            payment_date=dto.payment_date,
            payment_method=dto.payment_method,
            notes=dto.notes,
        )


class PlanResponseSchema(BaseModel):
    """Schema for a plan with its payment schedule."""

    plan_id: str
    customer_id: str
    customer_name: Optional[str] = None
    sale_id: Optional[str] = None
    total_amount: float
    down_payment: float
    remaining_balance: float
    paid_amount: float
    term_months: int
    interest_rate: float
    status: PlanStatus
    start_date: date
    end_date: date
    notes: str
    payments: list[PaymentSchema]

    @classmethod
    def from_dto(cls, dto: PlanResponse) -> "PlanResponseSchema":
        return cls(
            plan_id=dto.plan_id,
            customer_id=dto.customer_id,
            customer_name=dto.customer_name,
            sale_id=dto.sale_id,
            total_amount=float(dto.total_amount),
            down_payment=float(dto.down_payment),
            remaining_balance=float(dto.remaining_balance),
            paid_amount=float(dto.paid_amount),
            term_months=dto.term_months,
            interest_rate=float(dto.interest_rate),
            status=dto.status,
            start_date=dto.start_date,
            end_date=dto.end_date,
            notes=dto.notes,
            payments=[PaymentSchema.from_dto(p) for p in dto.payments],
        )


class SchedulePreviewResponseSchema(BaseModel):
    """Schema for POST /v1/plans/schedule/preview response."""

    financed_amount: float
    monthly_payment: float
    total_payable: float
    end_date: date
    payments: list[PaymentSchema]

    @classmethod
    def from_dto(cls, dto: SchedulePreviewResponse) -> "SchedulePreviewResponseSchema":
        return cls(
            financed_amount=float(dto.financed_amount),
            monthly_payment=float(dto.monthly_payment),
            total_payable=float(dto.total_payable),
            end_date=dto.end_date,
            payments=[PaymentSchema.from_dto(p) for p in dto.payments],
        )
