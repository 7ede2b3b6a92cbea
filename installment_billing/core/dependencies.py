"""Dependency injection for FastAPI."""

from datetime import datetime
from typing import Annotated, Callable

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from installment_billing.infrastructure.database import get_db_session
from installment_billing.infrastructure.repositories import (
    PostgresPaymentRepository,
    PostgresPlanRepository,
    PostgresReminderRepository,
)
from installment_billing.infrastructure.clients import (
    HttpExchangeRateClient,
    HttpReminderNotifier,
)
from installment_billing.application.services import (
    CurrencyService,
    PaymentService,
    PlanService,
    RateTableProvider,
    ReminderService,
    ReportService,
    rate_provider,
)
from installment_billing.domain.interfaces import ExchangeRateClient, ReminderNotifier


# Clock
def get_clock() -> Callable[[], datetime]:
    """Source of "now" for effective status, windows and reminders."""
    return datetime.now


# Repository dependencies
async def get_plan_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresPlanRepository:
    return PostgresPlanRepository(session)


async def get_payment_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresPaymentRepository:
    return PostgresPaymentRepository(session)


async def get_reminder_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresReminderRepository:
    return PostgresReminderRepository(session)


# External client dependencies
def get_notifier() -> ReminderNotifier:
    """Get a ReminderNotifier instance."""
    return HttpReminderNotifier()


def get_exchange_rate_client() -> ExchangeRateClient:
    """Get an ExchangeRateClient instance."""
    return HttpExchangeRateClient()


def get_rate_provider() -> RateTableProvider:
    """The process-wide rate table holder."""
    return rate_provider


# Service dependencies
async def get_plan_service(
    plan_repo: Annotated[PostgresPlanRepository, Depends(get_plan_repository)],
    clock: Annotated[Callable[[], datetime], Depends(get_clock)],
) -> PlanService:
    return PlanService(plan_repository=plan_repo, clock=clock)


async def get_payment_service(
    plan_repo: Annotated[PostgresPlanRepository, Depends(get_plan_repository)],
    payment_repo: Annotated[PostgresPaymentRepository, Depends(get_payment_repository)],
    clock: Annotated[Callable[[], datetime], Depends(get_clock)],
) -> PaymentService:
    return PaymentService(
        plan_repository=plan_repo,
        payment_repository=payment_repo,
        clock=clock,
    )


async def get_reminder_service(
    payment_repo: Annotated[PostgresPaymentRepository, Depends(get_payment_repository)],
    reminder_repo: Annotated[PostgresReminderRepository, Depends(get_reminder_repository)],
    notifier: Annotated[ReminderNotifier, Depends(get_notifier)],
    clock: Annotated[Callable[[], datetime], Depends(get_clock)],
) -> ReminderService:
    """Get a ReminderService instance with all dependencies."""
    return ReminderService(
        payment_repository=payment_repo,
        reminder_repository=reminder_repo,
        notifier=notifier,
        clock=clock,
    )


async def get_report_service(
    plan_repo: Annotated[PostgresPlanRepository, Depends(get_plan_repository)],
    payment_repo: Annotated[PostgresPaymentRepository, Depends(get_payment_repository)],
    clock: Annotated[Callable[[], datetime], Depends(get_clock)],
) -> ReportService:
    return ReportService(
        plan_repository=plan_repo,
        payment_repository=payment_repo,
        clock=clock,
    )


def get_currency_service(
    provider: Annotated[RateTableProvider, Depends(get_rate_provider)],
    client: Annotated[ExchangeRateClient, Depends(get_exchange_rate_client)],
) -> CurrencyService:
    return CurrencyService(provider=provider, client=client)
