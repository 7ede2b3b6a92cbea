"""External API client implementations."""

from .exchange_rate_client import HttpExchangeRateClient
from .notification_client import HttpReminderNotifier

__all__ = [
    "HttpExchangeRateClient",
    "HttpReminderNotifier",
]
