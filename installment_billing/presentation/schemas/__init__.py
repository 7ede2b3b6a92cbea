"""Pydantic schemas for API request/response validation."""

from .plan import (
    CreatePlanRequestSchema,
    PaymentSchema,
    PlanResponseSchema,
    SchedulePreviewResponseSchema,
    UpdatePlanRequestSchema,
)
from .payment import (
    AddPaymentRequestSchema,
    RecordPaymentRequestSchema,
    UpdatePaymentStatusRequestSchema,
)
from .reminder import (
    GenerateRemindersRequestSchema,
    ReminderSchema,
    SendRemindersResponseSchema,
)
from .report import ReportResponseSchema, ReportSummarySchema, SummaryResponseSchema
from .currency import ConversionResponseSchema, CurrencySchema, RateTableResponseSchema
from .error import ErrorResponseSchema

__all__ = [
    "CreatePlanRequestSchema",
    "PaymentSchema",
    "PlanResponseSchema",
    "SchedulePreviewResponseSchema",
    "UpdatePlanRequestSchema",
    "AddPaymentRequestSchema",
    "RecordPaymentRequestSchema",
    "UpdatePaymentStatusRequestSchema",
    "GenerateRemindersRequestSchema",
    "ReminderSchema",
    "SendRemindersResponseSchema",
    "ReportResponseSchema",
    "ReportSummarySchema",
    "SummaryResponseSchema",
    "ConversionResponseSchema",
    "CurrencySchema",
    "RateTableResponseSchema",
    "ErrorResponseSchema",
]
