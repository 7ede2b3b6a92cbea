"""
Reminder Planning.

Builds the upcoming/due/overdue reminders for an installment payment and
selects the reminders that are ready to be sent.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, List

from installment_billing.domain.entities import (
    InstallmentPayment,
    PaymentReminder,
    ReminderType,
)

from .settings import BillingSettings, billing_settings
from .windows import as_instant

DATE_FORMAT = "%b %d, %Y"


def _message(reminder_type: ReminderType, payment: InstallmentPayment, days: int) -> str:
    amount = payment.amount
    if reminder_type == ReminderType.UPCOMING:
        return (
            f"Your payment of {amount} is due in {days} days on "
            f"{payment.due_date.strftime(DATE_FORMAT)}."
        )
    if reminder_type == ReminderType.DUE:
        return f"Your payment of {amount} is due today."
    return (
        f"Your payment of {amount} is overdue. "
        "Please make your payment as soon as possible."
    )


def plan_reminders(
    payment: InstallmentPayment,
    types: Iterable[ReminderType | str],
    now: datetime | None = None,
    settings: BillingSettings | None = None,
) -> List[PaymentReminder]:
    """
    Build reminders for a payment.

    Rules:
        - upcoming: fires ``upcoming_reminder_days`` before the due date,
          only when that date is still in the future
        - due: fires on the due date, only when the due date is in the future
        - overdue: fires ``overdue_reminder_days`` after the due date, always

    Reminders are returned unsent and in upcoming, due, overdue order
    regardless of the order of ``types``.

    Args:
        payment: The payment to remind about
        types: Requested reminder types
        now: Reference instant, defaults to now
        settings: Billing settings for the lead/lag days

    Returns:
        New PaymentReminder entities (not persisted)
    """
    settings = settings or billing_settings
    now = as_instant(now or datetime.now())
    requested = {ReminderType(t) for t in types}
    reminders: List[PaymentReminder] = []

    if ReminderType.UPCOMING in requested:
        lead = settings.upcoming_reminder_days
        reminder_date = payment.due_date - timedelta(days=lead)
        if as_instant(reminder_date) > now:
            reminders.append(
                PaymentReminder(
                    payment_id=payment.id,
                    reminder_date=reminder_date,
                    reminder_type=ReminderType.UPCOMING,
                    message=_message(ReminderType.UPCOMING, payment, lead),
                )
            )

    if ReminderType.DUE in requested and as_instant(payment.due_date) > now:
        reminders.append(
            PaymentReminder(
                payment_id=payment.id,
                reminder_date=payment.due_date,
                reminder_type=ReminderType.DUE,
                message=_message(ReminderType.DUE, payment, 0),
            )
        )

    if ReminderType.OVERDUE in requested:
        lag = settings.overdue_reminder_days
        reminders.append(
            PaymentReminder(
                payment_id=payment.id,
                reminder_date=payment.due_date + timedelta(days=lag),
                reminder_type=ReminderType.OVERDUE,
                message=_message(ReminderType.OVERDUE, payment, lag),
            )
        )

    return reminders


def reminders_due(
    reminders: Iterable[PaymentReminder],
    today: date,
) -> List[PaymentReminder]:
    """Unsent reminders dated on or before ``today``."""
    if isinstance(today, datetime):
        today = today.date()
    return [r for r in reminders if not r.sent and r.reminder_date <= today]
