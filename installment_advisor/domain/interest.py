"""Interest accrual and discounting of installment cash flows"""

from decimal import Decimal

from installment_advisor.domain.exceptions import PreconditionError
from installment_advisor.domain.models import InterestMode

ONE = Decimal("1")


def accrue_installment_total(
    principal: Decimal,
    periods: int,
    periodic_rate: Decimal,
    mode: InterestMode = InterestMode.COMPOUND,
) -> Decimal:
    """
    Total owed on an interest-bearing installment plan.

    - simple:   principal * (1 + rate * periods)
    - compound: principal * (1 + rate) ** periods
    """
    if mode is InterestMode.SIMPLE:
        return principal * (ONE + periodic_rate * periods)
    return principal * (ONE + periodic_rate) ** periods


def present_value(amount: Decimal, periods: int, periodic_rate: Decimal) -> Decimal:
    """Sum of `periods` equal payments, each discounted to today at `periodic_rate`"""
    if periods < 1:
        raise PreconditionError("periods", "must be at least 1")

    total = Decimal("0")
    factor = ONE
    for _ in range(periods):
        factor *= ONE + periodic_rate
        total += amount / factor
    return total
