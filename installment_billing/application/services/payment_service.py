"""Payment service - records and edits payments inside a plan."""

from datetime import datetime
from typing import Callable, Tuple
from uuid import UUID

import structlog

from installment_billing.core.metrics import (
    record_payment_recorded,
    record_plan_closed,
    record_status_change,
)
from installment_billing.domain.entities import (
    InstallmentPayment,
    InstallmentPlan,
    PaymentStatus,
    PlanStatus,
)
from installment_billing.domain.exceptions import (
    InvalidPaymentRequestException,
    InvalidStatusTransitionException,
    PaymentNotFoundException,
    PlanNotFoundException,
)
from installment_billing.domain.interfaces import PaymentRepository, PlanRepository
from installment_billing.application.dto import (
    AddPaymentRequest,
    PlanResponse,
    RecordPaymentRequest,
    UpdatePaymentStatusRequest,
)
from installment_billing.service.billing import to_money

logger = structlog.get_logger(__name__)


class PaymentService:
    """
    Application service for payment use cases.

    Payments are changed through their plan: each use case loads the
    plan aggregate, changes it, and writes it back, keeping
    ``remaining_balance`` equal to the financed amount minus paid
    amounts.
    """

    def __init__(
        self,
        plan_repository: PlanRepository,
        payment_repository: PaymentRepository,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._plan_repo = plan_repository
        self._payment_repo = payment_repository
        self._clock = clock

    async def record_payment(
        self,
        payment_id: UUID,
        request: RecordPaymentRequest,
    ) -> PlanResponse:
        """
        Mark a payment as paid.

        The recorded amount (when given) replaces the scheduled amount and
        is what comes off the remaining balance. The plan completes once
        no pending or overdue payments remain.

        Raises:
            PaymentNotFoundException: If payment not found
            InvalidPaymentRequestException: If validation fails or the
                plan is cancelled
            InvalidStatusTransitionException: If the payment is already
                paid or cancelled
        """
        errors = request.validate()
        if errors:
            raise InvalidPaymentRequestException("; ".join(errors))

        plan, payment = await self._load(payment_id)

        if plan.status == PlanStatus.CANCELLED:
            raise InvalidPaymentRequestException(
                f"Cannot record a payment on cancelled plan {plan.id}"
            )
        if not payment.is_open:
            raise InvalidStatusTransitionException(
                "payment", payment.status.value, PaymentStatus.PAID.value
            )

        amount = to_money(request.amount) if request.amount is not None else None
        payment.mark_paid(
            payment_date=request.payment_date,
            payment_method=request.payment_method,
            notes=request.notes,
            amount=amount,
        )
        plan.apply_paid(payment.amount)
        self._refresh_completion(plan)

        await self._plan_repo.update(plan)
        record_payment_recorded(payment.payment_method)

        logger.info(
            "payment_recorded",
            payment_id=str(payment.id),
            plan_id=str(plan.id),
            amount=str(payment.amount),
            remaining_balance=str(plan.remaining_balance),
            plan_status=plan.status.value,
        )

        return PlanResponse.from_entity(plan, self._today())

    async def update_payment_status(
        self,
        payment_id: UUID,
        request: UpdatePaymentStatusRequest,
    ) -> PlanResponse:
        """
        Set a payment's stored status.

        Moving into ``paid`` takes the amount off the balance (and dates
        the payment today unless a date is given); moving out of ``paid``
        puts it back and clears the payment date.

        Raises:
            PaymentNotFoundException: If payment not found
            InvalidStatusTransitionException: If the plan is cancelled
        """
        plan, payment = await self._load(payment_id)
        new_status = PaymentStatus(request.status)
        old_status = payment.status

        if plan.status == PlanStatus.CANCELLED:
            raise InvalidStatusTransitionException(
                "payment", old_status.value, new_status.value
            )

        if new_status != old_status:
            if old_status == PaymentStatus.PAID:
                plan.release_paid(payment.amount)
                payment.payment_date = None

            if new_status == PaymentStatus.PAID:
                payment.mark_paid(request.payment_date or self._today())
                plan.apply_paid(payment.amount)
            else:
                payment.status = new_status

            self._refresh_completion(plan)
            await self._plan_repo.update(plan)
            record_status_change(old_status.value, new_status.value)

            logger.info(
                "payment_status_changed",
                payment_id=str(payment.id),
                plan_id=str(plan.id),
                from_status=old_status.value,
                to_status=new_status.value,
                remaining_balance=str(plan.remaining_balance),
            )

        return PlanResponse.from_entity(plan, self._today())

    async def add_payment(self, plan_id: UUID, request: AddPaymentRequest) -> PlanResponse:
        """
        Add an ad-hoc pending payment to a plan.

        Raises:
            PlanNotFoundException: If plan not found
            InvalidPaymentRequestException: If validation fails or the
                plan is cancelled
        """
        errors = request.validate()
        if errors:
            raise InvalidPaymentRequestException("; ".join(errors))

        plan = await self._plan_repo.get_by_id(plan_id)
        if plan is None:
            raise PlanNotFoundException(str(plan_id))
        if plan.status == PlanStatus.CANCELLED:
            raise InvalidPaymentRequestException(
                f"Cannot add a payment to cancelled plan {plan.id}"
            )

        payment = InstallmentPayment(
            plan_id=plan.id,
            amount=to_money(request.amount),
            due_date=request.due_date,
            notes=request.notes,
        )
        plan.payments.append(payment)
        plan.payments.sort(key=lambda p: p.due_date)
        plan.touch()
        self._refresh_completion(plan)

        await self._plan_repo.update(plan)
        logger.info(
            "payment_added",
            payment_id=str(payment.id),
            plan_id=str(plan.id),
            amount=str(payment.amount),
        )

        return PlanResponse.from_entity(plan, self._today())

    async def delete_payment(self, payment_id: UUID) -> PlanResponse:
        """
        Remove a payment from its plan.

        A paid payment's amount goes back onto the remaining balance.

        Raises:
            PaymentNotFoundException: If payment not found
        """
        plan, payment = await self._load(payment_id)

        if payment.is_paid:
            plan.release_paid(payment.amount)
        plan.payments = [p for p in plan.payments if p.id != payment.id]
        plan.touch()
        self._refresh_completion(plan)

        await self._plan_repo.update(plan)
        logger.info(
            "payment_deleted",
            payment_id=str(payment.id),
            plan_id=str(plan.id),
            remaining_balance=str(plan.remaining_balance),
        )

        return PlanResponse.from_entity(plan, self._today())

    async def _load(self, payment_id: UUID) -> Tuple[InstallmentPlan, InstallmentPayment]:
        found = await self._payment_repo.get_by_id(payment_id)
        if found is None or found.plan_id is None:
            logger.warning("payment_not_found", payment_id=str(payment_id))
            raise PaymentNotFoundException(str(payment_id))

        plan = await self._plan_repo.get_by_id(found.plan_id)
        payment = plan.get_payment(found.id) if plan else None
        if plan is None or payment is None:
            raise PaymentNotFoundException(str(payment_id))

        return plan, payment

    def _refresh_completion(self, plan: InstallmentPlan) -> None:
        before = plan.status
        plan.refresh_completion()
        if before != plan.status:
            if plan.status == PlanStatus.COMPLETED:
                record_plan_closed("completed")
            logger.info(
                "plan_status_changed",
                plan_id=str(plan.id),
                from_status=before.value,
                to_status=plan.status.value,
            )

    def _today(self):
        return self._clock().date()
