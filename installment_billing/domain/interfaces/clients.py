"""External client interfaces."""

from abc import ABC, abstractmethod

from installment_billing.domain.entities import InstallmentPayment, PaymentReminder
from installment_billing.service.billing.currency import RateTable


class ReminderNotifier(ABC):
    """
    Abstract client for delivering payment reminders.

    The concrete channel (e-mail, SMS, push) sits behind a webhook.
    """

    @abstractmethod
    async def send_reminder(
        self,
        reminder: PaymentReminder,
        payment: InstallmentPayment | None = None,
    ) -> bool:
        """
        Deliver a reminder.

        Args:
            reminder: The reminder to deliver
            payment: The payment it refers to, when known

        Returns:
            True if the reminder was delivered

        Note:
            Implementations should handle retries with backoff.
        """
        ...


class ExchangeRateClient(ABC):
    """Abstract client for the exchange-rate API."""

    @abstractmethod
    async def fetch_rates(self, current: RateTable) -> RateTable:
        """
        Fetch the latest rates.

        Args:
            current: The table to derive the refreshed table from

        Returns:
            A new RateTable; ``current`` is left untouched

        Raises:
            ExchangeRateAPIException: If the API fails or times out
        """
        ...
