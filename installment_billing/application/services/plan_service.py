"""Plan service - handles installment plan use cases."""

from datetime import datetime
from decimal import Decimal
from typing import Callable, List, Tuple
from uuid import UUID

import structlog

from installment_billing.core.metrics import record_plan_closed, record_plan_created
from installment_billing.domain.entities import (
    InstallmentPayment,
    InstallmentPlan,
    PlanStatus,
)
from installment_billing.domain.exceptions import (
    InvalidPlanRequestException,
    InvalidStatusTransitionException,
    PlanNotFoundException,
)
from installment_billing.domain.interfaces import PlanRepository
from installment_billing.application.dto import (
    CreatePlanRequest,
    PaymentDTO,
    PlanResponse,
    SchedulePreviewResponse,
    UpdatePlanRequest,
)
from installment_billing.service.billing import (
    calculate_monthly_payment,
    generate_schedule,
    plan_end_date,
    to_money,
)

logger = structlog.get_logger(__name__)


class PlanService:
    """
    Application service for installment plan use cases.

    Every path that builds a schedule validates the request first, so
    the schedule generator only ever sees sane inputs from here.
    """

    def __init__(
        self,
        plan_repository: PlanRepository,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._plan_repo = plan_repository
        self._clock = clock

    async def create_plan(self, request: CreatePlanRequest) -> PlanResponse:
        """
        Create a plan and persist it with its payment schedule.

        Raises:
            InvalidPlanRequestException: If request validation fails
        """
        payments, _, total, down = self._build_schedule(request)

        plan = InstallmentPlan(
            customer_id=request.customer_id.strip(),
            customer_name=request.customer_name,
            sale_id=request.sale_id,
            total_amount=total,
            down_payment=down,
            remaining_balance=total - down,
            term_months=request.term_months,
            interest_rate=Decimal(request.interest_rate),
            start_date=request.start_date,
            end_date=plan_end_date(request.start_date, request.term_months),
            notes=request.notes,
            payments=payments,
        )
        for payment in payments:
            payment.plan_id = plan.id

        await self._plan_repo.save(plan)
        record_plan_created(plan.financed_amount, plan.interest_rate)

        logger.info(
            "plan_created",
            plan_id=str(plan.id),
            customer_id=plan.customer_id,
            financed=str(plan.financed_amount),
            term_months=plan.term_months,
            interest_rate=str(plan.interest_rate),
        )

        return PlanResponse.from_entity(plan, self._today())

    async def preview_schedule(self, request: CreatePlanRequest) -> SchedulePreviewResponse:
        """
        Build the schedule a plan would get, without saving anything.

        Raises:
            InvalidPlanRequestException: If request validation fails
        """
        payments, monthly_payment, total, down = self._build_schedule(request)
        financed = total - down
        total_payable = sum((p.amount for p in payments), Decimal("0.00"))

        return SchedulePreviewResponse(
            financed_amount=financed,
            monthly_payment=monthly_payment,
            total_payable=total_payable,
            end_date=plan_end_date(request.start_date, request.term_months),
            payments=[PaymentDTO.from_entity(p, self._today()) for p in payments],
        )

    async def get_plan(self, plan_id: UUID) -> PlanResponse:
        """
        Retrieve a plan by ID.

        Raises:
            PlanNotFoundException: If plan not found
        """
        plan = await self._get(plan_id)

        logger.info(
            "plan_retrieved",
            plan_id=str(plan_id),
            customer_id=plan.customer_id,
            num_payments=len(plan.payments),
        )

        return PlanResponse.from_entity(plan, self._today())

    async def list_plans(
        self,
        customer_id: str | None = None,
        status: PlanStatus | None = None,
    ) -> List[PlanResponse]:
        plans = await self._plan_repo.list_plans(customer_id=customer_id, status=status)

        logger.info(
            "plans_listed",
            customer_id=customer_id,
            status=status.value if status else None,
            count=len(plans),
        )

        today = self._today()
        return [PlanResponse.from_entity(plan, today) for plan in plans]

    async def update_plan(self, plan_id: UUID, request: UpdatePlanRequest) -> PlanResponse:
        """
        Update a plan's notes and/or status.

        Moving to ``cancelled`` cancels the open payments too. A cancelled
        plan cannot change status again.

        Raises:
            PlanNotFoundException: If plan not found
            InvalidStatusTransitionException: If the plan is cancelled
        """
        plan = await self._get(plan_id)

        if request.notes is not None:
            plan.notes = request.notes
            plan.touch()

        if request.status is not None and request.status != plan.status:
            self._change_status(plan, PlanStatus(request.status))

        await self._plan_repo.update(plan)
        logger.info("plan_updated", plan_id=str(plan_id), status=plan.status.value)

        return PlanResponse.from_entity(plan, self._today())

    async def cancel_plan(self, plan_id: UUID) -> PlanResponse:
        """
        Cancel a plan and its pending/overdue payments.

        Raises:
            PlanNotFoundException: If plan not found
            InvalidStatusTransitionException: If the plan is already cancelled
        """
        plan = await self._get(plan_id)
        self._change_status(plan, PlanStatus.CANCELLED)
        await self._plan_repo.update(plan)

        return PlanResponse.from_entity(plan, self._today())

    async def delete_plan(self, plan_id: UUID) -> None:
        """
        Delete a plan with its payments and reminders.

        Raises:
            PlanNotFoundException: If plan not found
        """
        deleted = await self._plan_repo.delete(plan_id)
        if not deleted:
            raise PlanNotFoundException(str(plan_id))

        record_plan_closed("deleted")
        logger.info("plan_deleted", plan_id=str(plan_id))

    def _change_status(self, plan: InstallmentPlan, status: PlanStatus) -> None:
        if plan.status == PlanStatus.CANCELLED:
            raise InvalidStatusTransitionException(
                "plan", plan.status.value, status.value
            )

        previous = plan.status
        if status == PlanStatus.CANCELLED:
            plan.cancel()
        else:
            plan.status = status
            plan.touch()

        if status in (PlanStatus.CANCELLED, PlanStatus.COMPLETED):
            record_plan_closed(status.value)

        logger.info(
            "plan_status_changed",
            plan_id=str(plan.id),
            from_status=previous.value,
            to_status=status.value,
        )

    def _build_schedule(
        self, request: CreatePlanRequest
    ) -> Tuple[List[InstallmentPayment], Decimal, Decimal, Decimal]:
        """Validate, then schedule the cent-rounded amounts the plan will store."""
        errors = request.validate()
        if errors:
            raise InvalidPlanRequestException("; ".join(errors))

        total = to_money(request.total_amount)
        down = to_money(request.down_payment)
        monthly_payment = calculate_monthly_payment(
            total - down, request.term_months, request.interest_rate
        )
        payments = generate_schedule(
            total_amount=total,
            down_payment=down,
            term_months=request.term_months,
            annual_interest_rate=request.interest_rate,
            start_date=request.start_date,
        )
        return payments, monthly_payment, total, down

    async def _get(self, plan_id: UUID) -> InstallmentPlan:
        plan = await self._plan_repo.get_by_id(plan_id)
        if plan is None:
            logger.warning("plan_not_found", plan_id=str(plan_id))
            raise PlanNotFoundException(str(plan_id))
        return plan

    def _today(self):
        return self._clock().date()
