"""
Domain Interfaces (Ports)
"""

from .repositories import PaymentRepository, PlanRepository, ReminderRepository
from .clients import ExchangeRateClient, ReminderNotifier

__all__ = [
    "PaymentRepository",
    "PlanRepository",
    "ReminderRepository",
    "ExchangeRateClient",
    "ReminderNotifier",
]
