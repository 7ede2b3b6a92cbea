"""
Amortization Schedule Generation.

Turns the financed part of a sale into an ordered list of monthly
installment payments:
- Fixed-payment annuity when the plan carries interest
- Plain division when it does not
- Calendar-month due dates
- Final payment absorbs rounding drift
"""

from datetime import date
from decimal import Decimal
from typing import List

from dateutil.relativedelta import relativedelta

from installment_billing.domain.entities import InstallmentPayment, PaymentStatus

from .money import ZERO, to_money


def add_months(start: date, months: int) -> date:
    """
    Add calendar months to a date.

    Days past the end of the target month are clamped to its last day,
    so Jan 31 + 1 month is Feb 28 (Feb 29 in leap years).
    """
    return start + relativedelta(months=months)


def plan_end_date(start_date: date, term_months: int) -> date:
    """End date of a plan: ``start_date`` plus the full term."""
    return add_months(start_date, term_months)


def monthly_rate(annual_interest_rate: Decimal) -> Decimal:
    """Convert an annual percentage rate (e.g. 12) to a monthly fraction (0.01)."""
    return Decimal(annual_interest_rate) / 100 / 12


def calculate_monthly_payment(
    principal: Decimal,
    term_months: int,
    annual_interest_rate: Decimal,
) -> Decimal:
    """
    Calculate the fixed monthly payment, rounded to cents.

    Algorithm:
        With interest (r = monthly rate, n = term):
            payment = principal * r(1+r)^n / ((1+r)^n - 1)
        Without interest:
            payment = principal / n

    The zero-rate branch exists because the annuity formula degenerates
    to 0/0 when r is 0.

    Args:
        principal: Amount being financed (total minus down payment)
        term_months: Number of monthly payments (must be positive)
        annual_interest_rate: Annual rate in percent

    Returns:
        Payment amount rounded half-up to 2 decimal places
    """
    principal = Decimal(principal)
    rate = Decimal(annual_interest_rate)

    if rate > 0:
        r = monthly_rate(rate)
        growth = (1 + r) ** term_months
        payment = principal * (r * growth) / (growth - 1)
    else:
        payment = principal / term_months

    return to_money(payment)


def generate_schedule(
    total_amount: Decimal,
    down_payment: Decimal,
    term_months: int,
    annual_interest_rate: Decimal,
    start_date: date,
) -> List[InstallmentPayment]:
    """
    Generate the payment schedule for an installment plan.

    Algorithm:
        1. remaining = total_amount - down_payment
        2. Compute the fixed monthly payment (see calculate_monthly_payment)
        3. For i in 1..term_months, due on start_date + i months:
           - every entry but the last pays the fixed amount, clamped to
             [0, running balance]
           - the last entry pays whatever balance is left
        4. Every entry starts pending with no payment date

    The last-entry rule guarantees the schedule sums to exactly
    ``remaining`` no matter how per-period rounding drifts.

    Edge Cases:
        - term_months <= 0: empty schedule
        - remaining <= 0: zero (or negative) amounts; callers validate
          inputs before persisting a schedule

    Args:
        total_amount: Sale total
        down_payment: Amount paid up front
        term_months: Number of monthly installments
        annual_interest_rate: Annual rate in percent (0 for interest-free)
        start_date: Plan start; first payment is due one month later

    Returns:
        Payments ordered by due date, not yet attached to a plan
    """
    if term_months <= 0:
        return []

    remaining = to_money(Decimal(total_amount) - Decimal(down_payment))
    payment_amount = calculate_monthly_payment(
        remaining, term_months, annual_interest_rate
    )

    payments: List[InstallmentPayment] = []
    balance = remaining

    for i in range(term_months):
        is_last = i == term_months - 1
        amount = balance if is_last else payment_amount
        amount = min(max(ZERO, amount), balance)

        payments.append(
            InstallmentPayment(
                amount=amount,
                due_date=add_months(start_date, i + 1),
                status=PaymentStatus.PENDING,
            )
        )
        balance -= amount

    return payments
