"""Reminder service - schedules and delivers payment reminders."""

from datetime import datetime
from typing import Callable, List
from uuid import UUID

import structlog

from installment_billing.core.metrics import record_reminder_generated
from installment_billing.domain.entities import InstallmentPayment
from installment_billing.domain.exceptions import (
    InvalidPaymentRequestException,
    PaymentNotFoundException,
    ReminderNotFoundException,
)
from installment_billing.domain.interfaces import (
    PaymentRepository,
    ReminderNotifier,
    ReminderRepository,
)
from installment_billing.application.dto import (
    GenerateRemindersRequest,
    ReminderDTO,
    SendRemindersResponse,
)
from installment_billing.service.billing import (
    BillingSettings,
    plan_reminders,
    reminders_due,
)

logger = structlog.get_logger(__name__)


class ReminderService:
    """Application service for payment reminder use cases."""

    def __init__(
        self,
        payment_repository: PaymentRepository,
        reminder_repository: ReminderRepository,
        notifier: ReminderNotifier,
        clock: Callable[[], datetime] = datetime.now,
        settings: BillingSettings | None = None,
    ):
        self._payment_repo = payment_repository
        self._reminder_repo = reminder_repository
        self._notifier = notifier
        self._clock = clock
        self._settings = settings

    async def generate_reminders(
        self,
        payment_id: UUID,
        request: GenerateRemindersRequest,
    ) -> List[ReminderDTO]:
        """
        Create and store reminders for a payment.

        Reminder types whose date has already passed are skipped (except
        overdue, which is always created).

        Raises:
            InvalidPaymentRequestException: If no types are requested
            PaymentNotFoundException: If payment not found
        """
        errors = request.validate()
        if errors:
            raise InvalidPaymentRequestException("; ".join(errors))

        payment = await self._get_payment(payment_id)
        reminders = plan_reminders(
            payment,
            request.types,
            now=self._clock(),
            settings=self._settings,
        )

        await self._reminder_repo.save_many(reminders)
        for reminder in reminders:
            record_reminder_generated(reminder.reminder_type.value)

        logger.info(
            "reminders_generated",
            payment_id=str(payment_id),
            requested=[t.value for t in request.types],
            created=[r.reminder_type.value for r in reminders],
        )

        return [ReminderDTO.from_entity(r) for r in reminders]

    async def list_reminders(self, payment_id: UUID) -> List[ReminderDTO]:
        """
        Reminders stored for a payment, by reminder date.

        Raises:
            PaymentNotFoundException: If payment not found
        """
        await self._get_payment(payment_id)
        reminders = await self._reminder_repo.list_by_payment(payment_id)
        return [ReminderDTO.from_entity(r) for r in reminders]

    async def send_due_reminders(self) -> SendRemindersResponse:
        """
        Deliver every unsent reminder dated today or earlier.

        Only reminders the notifier confirms are marked as sent; failed
        ones stay unsent and are picked up by the next run.
        """
        today = self._clock().date()
        due = reminders_due(await self._reminder_repo.list_unsent(), today)

        delivered: List[UUID] = []
        payments: dict = {}
        for reminder in due:
            if reminder.payment_id not in payments:
                payments[reminder.payment_id] = await self._payment_repo.get_by_id(
                    reminder.payment_id
                )
            if await self._notifier.send_reminder(reminder, payments[reminder.payment_id]):
                delivered.append(reminder.id)

        sent = await self._reminder_repo.mark_sent(delivered)

        logger.info(
            "reminders_sent",
            attempted=len(due),
            sent=sent,
            failed=len(due) - len(delivered),
        )

        return SendRemindersResponse(
            attempted=len(due),
            sent=sent,
            failed=len(due) - len(delivered),
        )

    async def delete_reminder(self, reminder_id: UUID) -> None:
        """
        Delete a single reminder.

        Raises:
            ReminderNotFoundException: If reminder not found
        """
        deleted = await self._reminder_repo.delete(reminder_id)
        if not deleted:
            raise ReminderNotFoundException(str(reminder_id))

        logger.info("reminder_deleted", reminder_id=str(reminder_id))

    async def _get_payment(self, payment_id: UUID) -> InstallmentPayment:
        payment = await self._payment_repo.get_by_id(payment_id)
        if payment is None:
            logger.warning("payment_not_found", payment_id=str(payment_id))
            raise PaymentNotFoundException(str(payment_id))
        return payment
