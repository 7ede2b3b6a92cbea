"""Payment-related Pydantic schemas."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from installment_billing.domain.entities import PaymentStatus


class RecordPaymentRequestSchema(BaseModel):
    """Schema for POST /v1/payments/{payment_id}/record."""

    payment_date: date = Field(..., description="Date the money was received")
    payment_method: Optional[str] = Field(None, max_length=100, examples=["cash"])
    notes: Optional[str] = Field(None, max_length=2000)
    amount: Optional[Decimal] = Field(
        None,
        description="Amount received; defaults to the scheduled amount",
    )


class UpdatePaymentStatusRequestSchema(BaseModel):
    """Schema for PATCH /v1/payments/{payment_id}/status."""

    status: PaymentStatus
    payment_date: Optional[date] = Field(
        None,
        description="Used when moving to paid; defaults to today",
    )


class AddPaymentRequestSchema(BaseModel):
    """Schema for POST /v1/plans/{plan_id}/payments."""

    amount: Decimal
    due_date: date
    notes: Optional[str] = Field(None, max_length=2000)
