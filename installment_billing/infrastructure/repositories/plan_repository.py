"""SQLAlchemy repository implementation for installment plans."""

from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from installment_billing.domain.entities import (
    InstallmentPayment,
    InstallmentPlan,
    PaymentStatus,
    PlanStatus,
)
from installment_billing.domain.exceptions import PlanNotFoundException
from installment_billing.domain.interfaces import PlanRepository
from installment_billing.infrastructure.database.models import (
    InstallmentPaymentModel,
    InstallmentPlanModel,
)
from installment_billing.service.billing.money import from_cents, to_cents


def payment_to_entity(model: InstallmentPaymentModel) -> InstallmentPayment:
    return InstallmentPayment(
        id=UUID(model.id),
        plan_id=UUID(model.plan_id),
        amount=from_cents(model.amount_cents),
        due_date=model.due_date,
        status=PaymentStatus(model.status),
        payment_date=model.payment_date,
        payment_method=model.payment_method,
        notes=model.notes,
        created_at=model.created_at,
    )


def _write_payment(model: InstallmentPaymentModel, payment: InstallmentPayment) -> None:
    model.amount_cents = to_cents(payment.amount)
    model.due_date = payment.due_date
    model.status = payment.status.value
    model.payment_date = payment.payment_date
    model.payment_method = payment.payment_method
    model.notes = payment.notes


class PostgresPlanRepository(PlanRepository):
    """Plan repository storing each plan together with its payment schedule."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, plan: InstallmentPlan) -> InstallmentPlan:
        model = InstallmentPlanModel(
            id=str(plan.id),
            created_at=plan.created_at,
        )
        self._write_plan(model, plan)

        for payment in plan.payments:
            payment.plan_id = plan.id
            payment_model = InstallmentPaymentModel(
                id=str(payment.id),
                plan_id=str(plan.id),
                created_at=payment.created_at,
            )
            _write_payment(payment_model, payment)
            model.payments.append(payment_model)

        self._session.add(model)
        await self._session.flush()

        return plan

    async def update(self, plan: InstallmentPlan) -> InstallmentPlan:
        model = await self._load(plan.id)
        if model is None:
            raise PlanNotFoundException(str(plan.id))

        self._write_plan(model, plan)

        existing = {m.id: m for m in model.payments}
        synced = []
        for payment in plan.payments:
            payment.plan_id = plan.id
            payment_model = existing.get(str(payment.id))
            if payment_model is None:
                payment_model = InstallmentPaymentModel(
                    id=str(payment.id),
                    plan_id=str(plan.id),
                    created_at=payment.created_at,
                )
            _write_payment(payment_model, payment)
            synced.append(payment_model)

        # Payments dropped from the aggregate are removed as orphans
        model.payments = synced
        await self._session.flush()

        return plan

    async def get_by_id(self, plan_id: UUID) -> Optional[InstallmentPlan]:
        model = await self._load(plan_id)
        if model is None:
            return None
        return self._to_entity(model)

    async def list_plans(
        self,
        customer_id: str | None = None,
        status: PlanStatus | None = None,
    ) -> List[InstallmentPlan]:
        stmt = (
            select(InstallmentPlanModel)
            .options(selectinload(InstallmentPlanModel.payments))
            .order_by(InstallmentPlanModel.created_at.desc())
        )
        if customer_id is not None:
            stmt = stmt.where(InstallmentPlanModel.customer_id == customer_id)
        if status is not None:
            stmt = stmt.where(InstallmentPlanModel.status == PlanStatus(status).value)

        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def delete(self, plan_id: UUID) -> bool:
        model = await self._load(plan_id)
        if model is None:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def _load(self, plan_id: UUID) -> Optional[InstallmentPlanModel]:
        stmt = (
            select(InstallmentPlanModel)
            .options(
                selectinload(InstallmentPlanModel.payments).selectinload(
                    InstallmentPaymentModel.reminders
                )
            )
            .where(InstallmentPlanModel.id == str(plan_id))
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _write_plan(model: InstallmentPlanModel, plan: InstallmentPlan) -> None:
        model.customer_id = plan.customer_id
        model.customer_name = plan.customer_name
        model.sale_id = plan.sale_id
        model.total_cents = to_cents(plan.total_amount)
        model.down_payment_cents = to_cents(plan.down_payment)
        model.remaining_balance_cents = to_cents(plan.remaining_balance)
        model.term_months = plan.term_months
        model.interest_rate = float(plan.interest_rate)
        model.start_date = plan.start_date
        model.end_date = plan.end_date
        model.status = plan.status.value
        model.notes = plan.notes
        model.updated_at = plan.updated_at

    def _to_entity(self, model: InstallmentPlanModel) -> InstallmentPlan:
        return InstallmentPlan(
            id=UUID(model.id),
            customer_id=model.customer_id,
            customer_name=model.customer_name,
            sale_id=model.sale_id,
            total_amount=from_cents(model.total_cents),
            down_payment=from_cents(model.down_payment_cents),
            remaining_balance=from_cents(model.remaining_balance_cents),
            term_months=model.term_months,
            interest_rate=Decimal(str(model.interest_rate)),
            start_date=model.start_date,
            end_date=model.end_date,
            status=PlanStatus(model.status),
            notes=model.notes,
            payments=[payment_to_entity(p) for p in model.payments],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
