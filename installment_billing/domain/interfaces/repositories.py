"""Repository interfaces for data persistence."""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from installment_billing.domain.entities import (
    InstallmentPayment,
    InstallmentPlan,
    PaymentReminder,
    PlanStatus,
)


class PlanRepository(ABC):
    """
    Abstract repository for InstallmentPlan persistence.

    A plan is stored together with its payments; ``update`` writes the
    whole aggregate back.
    """

    @abstractmethod
    async def save(self, plan: InstallmentPlan) -> InstallmentPlan:
        """
        Persist a new plan with its payment schedule.

        Args:
            plan: The plan to save

        Returns:
            The saved plan
        """
        ...

    @abstractmethod
    async def update(self, plan: InstallmentPlan) -> InstallmentPlan:
        """
        Write an existing plan and its payments back.

        Payments missing from ``plan.payments`` are deleted, new ones are
        inserted.

        Args:
            plan: The plan to update

        Returns:
            The updated plan

        Raises:
            PlanNotFoundException: If the plan does not exist
        """
        ...

    @abstractmethod
    async def get_by_id(self, plan_id: UUID) -> Optional[InstallmentPlan]:
        """
        Retrieve a plan with its payments.

        Args:
            plan_id: The plan's unique identifier

        Returns:
            The plan if found, None otherwise
        """
        ...

    @abstractmethod
    async def list_plans(
        self,
        customer_id: str | None = None,
        status: PlanStatus | None = None,
    ) -> List[InstallmentPlan]:
        """
        Retrieve plans, newest first.

        Args:
            customer_id: Only plans for this customer
            status: Only plans in this status

        Returns:
            Matching plans with their payments
        """
        ...

    @abstractmethod
    async def delete(self, plan_id: UUID) -> bool:
        """
        Delete a plan and everything it owns.

        Returns:
            True if a plan was deleted
        """
        ...


class PaymentRepository(ABC):
    """Read access to installment payments across plans."""

    @abstractmethod
    async def get_by_id(self, payment_id: UUID) -> Optional[InstallmentPayment]:
        """
        Retrieve a payment by ID.

        Returns:
            The payment if found, None otherwise
        """
        ...

    @abstractmethod
    async def list_all(self) -> List[InstallmentPayment]:
        """
        Retrieve every payment, ordered by due date.

        Used as the snapshot for summaries and reports.
        """
        ...


class ReminderRepository(ABC):
    """Abstract repository for PaymentReminder persistence."""

    @abstractmethod
    async def save_many(self, reminders: List[PaymentReminder]) -> List[PaymentReminder]:
        """Persist a batch of new reminders."""
        ...

    @abstractmethod
    async def list_by_payment(self, payment_id: UUID) -> List[PaymentReminder]:
        """Reminders for one payment, ordered by reminder date."""
        ...

    @abstractmethod
    async def list_unsent(self) -> List[PaymentReminder]:
        """
        Every reminder not yet sent, ordered by reminder date.

        Which of them are due is decided by the caller.
        """
        ...

    @abstractmethod
    async def mark_sent(self, reminder_ids: List[UUID]) -> int:
        """
        Flip the sent flag on the given reminders.

        Returns:
            Number of reminders updated
        """
        ...

    @abstractmethod
    async def delete(self, reminder_id: UUID) -> bool:
        """Delete a reminder. Returns False if it does not exist."""
        ...
