"""HTTP implementation of ReminderNotifier."""

import asyncio
from typing import Any, Dict

import httpx
import structlog

from installment_billing.core.config import settings
from installment_billing.core.metrics import (
    track_notification_latency,
    record_notification_retry,
    record_notification_success,
    record_notification_failure,
)
from installment_billing.domain.entities import InstallmentPayment, PaymentReminder
from installment_billing.domain.interfaces import ReminderNotifier

logger = structlog.get_logger(__name__)


class HttpReminderNotifier(ReminderNotifier):
    """
    Delivers reminders by POSTing them to a notification webhook.

    Retries with exponential backoff; a delivery that never succeeds
    returns False instead of raising, so one bad reminder does not stop
    a batch.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url or settings.notification_webhook_url
        self._timeout = timeout or settings.notification_timeout
        self._max_retries = max_retries or settings.notification_max_retries
        self._transport = transport

    async def send_reminder(
        self,
        reminder: PaymentReminder,
        payment: InstallmentPayment | None = None,
    ) -> bool:
        payload: Dict[str, Any] = {
            "event": "payment_reminder",
            "reminder_id": str(reminder.id),
            "payment_id": str(reminder.payment_id),
            "reminder_type": reminder.reminder_type.value,
            "reminder_date": reminder.reminder_date.isoformat(),
            "message": reminder.message,
        }
        if payment is not None:
            payload["plan_id"] = str(payment.plan_id) if payment.plan_id else None
            payload["amount"] = str(payment.amount)
            payload["due_date"] = payment.due_date.isoformat()

        return await self._post(payload, str(reminder.id))

    async def _post(self, payload: Dict[str, Any], reminder_id: str) -> bool:
        """
        POST with retry logic.

        Uses exponential backoff: 0.1s, 0.2s, 0.4s, 0.8s, ...
        """
        for attempt in range(self._max_retries):
            try:
                with track_notification_latency():
                    async with httpx.AsyncClient(
                        timeout=self._timeout, transport=self._transport
                    ) as client:
                        response = await client.post(self._base_url, json=payload)

                if response.status_code < 400:
                    logger.info(
                        "reminder_delivered",
                        reminder_id=reminder_id,
                        status_code=response.status_code,
                    )
                    record_notification_success()
                    return True

                logger.warning(
                    "reminder_delivery_failed",
                    reminder_id=reminder_id,
                    status_code=response.status_code,
                    attempt=attempt + 1,
                    response=response.text[:200],
                )

            except httpx.TimeoutException:
                logger.warning(
                    "reminder_delivery_timeout",
                    reminder_id=reminder_id,
                    attempt=attempt + 1,
                )
            except httpx.HTTPError as e:
                logger.error(
                    "reminder_delivery_error",
                    reminder_id=reminder_id,
                    attempt=attempt + 1,
                    error=str(e),
                )

            if attempt < self._max_retries - 1:
                record_notification_retry()
                await asyncio.sleep(2**attempt * 0.1)

        logger.error(
            "reminder_delivery_exhausted_retries",
            reminder_id=reminder_id,
            max_retries=self._max_retries,
        )
        record_notification_failure()
        return False
