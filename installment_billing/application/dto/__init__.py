"""Data Transfer Objects for application layer."""

from .plan import (
    CreatePlanRequest,
    PaymentDTO,
    PlanResponse,
    SchedulePreviewResponse,
    UpdatePlanRequest,
)
from .payment import AddPaymentRequest, RecordPaymentRequest, UpdatePaymentStatusRequest
from .reminder import GenerateRemindersRequest, ReminderDTO, SendRemindersResponse
from .report import ReportResponse, SummaryResponse
from .currency import ConversionResponse, CurrencyDTO, RateTableResponse

__all__ = [
    "CreatePlanRequest",
    "PaymentDTO",
    "PlanResponse",
    "SchedulePreviewResponse",
    "UpdatePlanRequest",
    "AddPaymentRequest",
    "RecordPaymentRequest",
    "UpdatePaymentStatusRequest",
    "GenerateRemindersRequest",
    "ReminderDTO",
    "SendRemindersResponse",
    "ReportResponse",
    "SummaryResponse",
    "ConversionResponse",
    "CurrencyDTO",
    "RateTableResponse",
]
