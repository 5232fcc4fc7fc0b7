"""Rate conversions and income-tax adjustment of yield rates"""

from decimal import Decimal

from installment_advisor.domain.exceptions import PreconditionError

ONE = Decimal("1")
HUNDRED = Decimal("100")
MONTHS_PER_YEAR = Decimal("12")

# Regressive withholding on fixed income (IR regressivo): (max months held, withheld fraction)
WITHHOLDING_BRACKETS = (
    (6, Decimal("0.225")),
    (12, Decimal("0.20")),
    (24, Decimal("0.175")),
)
LONG_TERM_WITHHOLDING = Decimal("0.15")


def percent_to_decimal(percent: Decimal) -> Decimal:
    """12.5 -> 0.125"""
    return Decimal(percent) / HUNDRED


def annual_to_monthly(annual_percent: Decimal) -> Decimal:
    """
    Convert an effective annual percentage to an effective monthly decimal rate.

    (1 + i_annual) ** (1/12) - 1, e.g. 12.68 (% a.a.) -> ~0.01 (1% a.m.)
    """
    annual = percent_to_decimal(annual_percent)
    return (ONE + annual) ** (ONE / MONTHS_PER_YEAR) - ONE


def monthly_to_annual(monthly_percent: Decimal) -> Decimal:
    """Convert an effective monthly percentage to an effective annual decimal rate"""
    monthly = percent_to_decimal(monthly_percent)
    return (ONE + monthly) ** 12 - ONE


def retained_fraction(periods: int) -> Decimal:
    """Share of the yield kept after withholding tax for a holding of `periods` months"""
    if periods < 1:
        raise PreconditionError("periods", "must be at least 1")

    for max_months, withheld in WITHHOLDING_BRACKETS:
        if periods <= max_months:
            return ONE - withheld
    return ONE - LONG_TERM_WITHHOLDING


def adjust_for_tax(monthly_rate: Decimal, periods: int, consider_tax: bool) -> Decimal:
    """
    Net monthly yield rate after income tax.

    The number of installments is the proxy for how long the money stays
    invested. Without tax treatment the rate is returned unchanged.

    Brackets:
    - up to 6 months:   x 0.775
    - up to 12 months:  x 0.80
    - up to 24 months:  x 0.825
    - over 24 months:   x 0.85
    """
    if not consider_tax:
        return monthly_rate
    return monthly_rate * retained_fraction(periods)
