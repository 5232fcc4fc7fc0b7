"""Month-by-month yield simulation for money kept invested while paying installments"""

from decimal import Decimal
from typing import List, Optional

from installment_advisor.domain.exceptions import PreconditionError
from installment_advisor.domain.models import LedgerRow, YieldSimulation


def simulate_yield(
    periods: int,
    periodic_payment: Decimal,
    monthly_rate: Decimal,
    opening_balance: Optional[Decimal] = None,
    start_period: int = 1,
) -> YieldSimulation:
    """
    Yield earned on the part of the obligation not yet paid out.

    Conventions:
    - Base starts at the outstanding obligation (payment * periods) unless
      an explicit opening balance is given
    - Yield accrues on the opening balance of each period
    - The payment leaves the base after the yield is recorded

    Passing a ledger row's closing balance as `opening_balance` (and the next
    period number as `start_period`) resumes the same trajectory.

    Example:
        3 x 100 at 1% a.m. -> yields 3.00, 2.00, 1.00 (total 6.00)
    """
    if periods < 1:
        raise PreconditionError("periods", "must be at least 1")

    capital = periodic_payment * periods if opening_balance is None else opening_balance
    total_yield = Decimal("0")
    ledger: List[LedgerRow] = []

    for period in range(start_period, start_period + periods):
        period_yield = capital * monthly_rate
        total_yield += period_yield
        closing = capital - periodic_payment

        ledger.append(
            LedgerRow(
                period=period,
                opening_balance=capital,
                period_yield=period_yield,
                amount_paid=periodic_payment,
                closing_balance=closing,
            )
        )
        capital = closing

    return YieldSimulation(total_yield=total_yield, ledger=tuple(ledger))


def simulate_running_balance(
    opening_balance: Decimal,
    periods: int,
    periodic_payment: Decimal,
    monthly_rate: Decimal,
    first_period_extra: Decimal = Decimal("0"),
) -> YieldSimulation:
    """
    Invest `opening_balance` and pay the installments out of it.

    Each period the yield is credited before the payment is debited.
    `first_period_extra` (a down payment) is debited together with the
    first installment. A negative final balance means the investment did
    not cover the plan.
    """
    if periods < 1:
        raise PreconditionError("periods", "must be at least 1")

    balance = opening_balance
    total_yield = Decimal("0")
    ledger: List[LedgerRow] = []

    for period in range(1, periods + 1):
        period_yield = balance * monthly_rate
        total_yield += period_yield
        paid = periodic_payment + (first_period_extra if period == 1 else Decimal("0"))
        closing = balance + period_yield - paid

        ledger.append(
            LedgerRow(
                period=period,
                opening_balance=balance,
                period_yield=period_yield,
                amount_paid=paid,
                closing_balance=closing,
            )
        )
        balance = closing

    return YieldSimulation(total_yield=total_yield, ledger=tuple(ledger))
