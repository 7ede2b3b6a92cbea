"""SQLAlchemy repository implementation for payment reminders."""

from typing import List
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from installment_billing.domain.entities import PaymentReminder, ReminderType
from installment_billing.domain.interfaces import ReminderRepository
from installment_billing.infrastructure.database.models import PaymentReminderModel


class PostgresReminderRepository(ReminderRepository):
    """Reminder repository backed by the payment_reminders table."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save_many(self, reminders: List[PaymentReminder]) -> List[PaymentReminder]:
        for reminder in reminders:
            self._session.add(
                PaymentReminderModel(
                    id=str(reminder.id),
                    payment_id=str(reminder.payment_id),
                    reminder_date=reminder.reminder_date,
                    reminder_type=reminder.reminder_type.value,
                    message=reminder.message,
                    sent=reminder.sent,
                    created_at=reminder.created_at,
                )
            )

        await self._session.flush()
        return reminders

    async def list_by_payment(self, payment_id: UUID) -> List[PaymentReminder]:
        stmt = (
            select(PaymentReminderModel)
            .where(PaymentReminderModel.payment_id == str(payment_id))
            .order_by(PaymentReminderModel.reminder_date)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def list_unsent(self) -> List[PaymentReminder]:
        stmt = (
            select(PaymentReminderModel)
            .where(PaymentReminderModel.sent.is_(False))
            .order_by(PaymentReminderModel.reminder_date)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def mark_sent(self, reminder_ids: List[UUID]) -> int:
        if not reminder_ids:
            return 0

        stmt = (
            update(PaymentReminderModel)
            .where(PaymentReminderModel.id.in_([str(rid) for rid in reminder_ids]))
            .values(sent=True)
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount or 0

    async def delete(self, reminder_id: UUID) -> bool:
        stmt = delete(PaymentReminderModel).where(
            PaymentReminderModel.id == str(reminder_id)
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    def _to_entity(self, model: PaymentReminderModel) -> PaymentReminder:
        return PaymentReminder(
            id=UUID(model.id),
            payment_id=UUID(model.payment_id),
            reminder_date=model.reminder_date,
            reminder_type=ReminderType(model.reminder_type),
            message=model.message,
            sent=model.sent,
            created_at=model.created_at,
        )
