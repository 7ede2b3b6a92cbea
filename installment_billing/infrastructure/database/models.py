"""SQLAlchemy ORM models for installment billing entities."""

from datetime import datetime, date
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class InstallmentPlanModel(Base):
    """Persisted installment plan record."""

    __tablename__ = "installment_plans"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    customer_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    customer_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    sale_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    total_cents: Mapped[int] = mapped_column(Integer, nullable=False)
    down_payment_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    remaining_balance_cents: Mapped[int] = mapped_column(Integer, nullable=False)
    term_months: Mapped[int] = mapped_column(Integer, nullable=False)
    interest_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="active",
        index=True,
    )
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
    )

    payments: Mapped[list["InstallmentPaymentModel"]] = relationship(
        "InstallmentPaymentModel",
        back_populates="plan",
        cascade="all, delete-orphan",
        order_by="InstallmentPaymentModel.due_date",
    )


class InstallmentPaymentModel(Base):
    """Persisted payment record within a plan."""

    __tablename__ = "installment_payments"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    plan_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("installment_plans.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    due_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    amount_cents: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="pending",
    )
    payment_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    payment_method: Mapped[str | None] = mapped_column(String(100), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
    )

    plan: Mapped["InstallmentPlanModel"] = relationship(
        "InstallmentPlanModel",
        back_populates="payments",
    )
    reminders: Mapped[list["PaymentReminderModel"]] = relationship(
        "PaymentReminderModel",
        back_populates="payment",
        cascade="all, delete-orphan",
        order_by="PaymentReminderModel.reminder_date",
    )


class PaymentReminderModel(Base):
    """Persisted reminder scheduled for a payment."""

    __tablename__ = "payment_reminders"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    payment_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("installment_payments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    reminder_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    reminder_type: Mapped[str] = mapped_column(String(50), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    sent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
    )

    payment: Mapped["InstallmentPaymentModel"] = relationship(
        "InstallmentPaymentModel",
        back_populates="reminders",
    )
