"""SQLAlchemy repository implementation for installment payments."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from installment_billing.domain.entities import InstallmentPayment
from installment_billing.domain.interfaces import PaymentRepository
from installment_billing.infrastructure.database.models import InstallmentPaymentModel

from .plan_repository import payment_to_entity


class PostgresPaymentRepository(PaymentRepository):
    """
    Read-side payment repository.

    Writes go through the plan aggregate (see PostgresPlanRepository.update).
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, payment_id: UUID) -> Optional[InstallmentPayment]:
        stmt = select(InstallmentPaymentModel).where(
            InstallmentPaymentModel.id == str(payment_id)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return payment_to_entity(model)

    async def list_all(self) -> List[InstallmentPayment]:
        stmt = select(InstallmentPaymentModel).order_by(
            InstallmentPaymentModel.due_date,
            InstallmentPaymentModel.created_at,
        )
        result = await self._session.execute(stmt)
        return [payment_to_entity(model) for model in result.scalars().all()]
