"""Scenario evaluators - pay upfront or in installments?"""

from decimal import Decimal
from typing import Any, Callable, Dict, Mapping

from installment_advisor.domain.exceptions import PreconditionError
from installment_advisor.domain.interest import accrue_installment_total, present_value
from installment_advisor.domain.models import (
    AlternativeInvestmentInput,
    CashVsInstallmentsInput,
    ComparePlansInput,
    DownPaymentInput,
    LatePaymentInput,
    PresentValueInput,
    RateSpec,
    ScenarioKind,
    ScenarioResult,
    TotalWithDiscountInput,
    Verdict,
)
from installment_advisor.domain.rates import adjust_for_tax, percent_to_decimal
from installment_advisor.domain.simulator import simulate_running_balance, simulate_yield
from installment_advisor.domain.validation import parse_input

ONE = Decimal("1")


def _check_periods(periods: int, field: str = "periods") -> None:
    if periods < 1:
        raise PreconditionError(field, "must be at least 1")


def _net_monthly_rate(rate: RateSpec, periods: int) -> Decimal:
    return adjust_for_tax(rate.monthly_rate(), periods, rate.consider_income_tax)


def evaluate_total_with_discount(inp: TotalWithDiscountInput) -> ScenarioResult:
    """
    Scenario 1: full price paid in installments vs discounted cash price.

    The installment path may carry its own interest. The money not yet paid
    out is assumed invested at the (tax-adjusted) yield rate, and that yield
    is credited against the installment total.
    """
    _check_periods(inp.periods)

    cash_price = inp.total_price * (ONE - percent_to_decimal(inp.cash_discount_pct))
    installment_total = accrue_installment_total(
        inp.total_price,
        inp.periods,
        percent_to_decimal(inp.installment_interest_pct),
        inp.interest_mode,
    )
    installment_amount = installment_total / inp.periods

    monthly_rate = _net_monthly_rate(inp.rate, inp.periods)
    simulation = simulate_yield(inp.periods, installment_amount, monthly_rate)
    effective_cost = installment_total - simulation.total_yield

    verdict = Verdict.PAY_UPFRONT if cash_price < effective_cost else Verdict.INSTALLMENT

    return ScenarioResult(
        kind=ScenarioKind.TOTAL_WITH_DISCOUNT,
        summary={
            "cash_price": cash_price,
            "installment_total": installment_total,
            "installment_amount": installment_amount,
            "total_yield": simulation.total_yield,
            "effective_installment_cost": effective_cost,
            "monthly_rate": monthly_rate,
        },
        ledger=simulation.ledger,
        verdict=verdict,
    )


def evaluate_cash_vs_installments(inp: CashVsInstallmentsInput) -> ScenarioResult:
    """Scenario 2: fixed cash price vs a fixed number of fixed installments"""
    _check_periods(inp.periods)

    installment_total = inp.installment_amount * inp.periods
    monthly_rate = _net_monthly_rate(inp.rate, inp.periods)
    simulation = simulate_yield(inp.periods, inp.installment_amount, monthly_rate)
    effective_cost = installment_total - simulation.total_yield

    verdict = Verdict.PAY_UPFRONT if inp.cash_price < effective_cost else Verdict.INSTALLMENT

    return ScenarioResult(
        kind=ScenarioKind.CASH_VS_FIXED_INSTALLMENTS,
        summary={
            "cash_price": inp.cash_price,
            "installment_total": installment_total,
            "total_yield": simulation.total_yield,
            "effective_installment_cost": effective_cost,
            "monthly_rate": monthly_rate,
        },
        ledger=simulation.ledger,
        verdict=verdict,
    )


def evaluate_down_payment(inp: DownPaymentInput) -> ScenarioResult:
    """
    Scenario 3: down payment + installments vs paying cash.

    The cash amount is invested instead; the down payment and every
    installment are paid out of it. If the balance never runs out the
    installment plan wins.
    """
    _check_periods(inp.periods)

    monthly_rate = _net_monthly_rate(inp.rate, inp.periods)
    simulation = simulate_running_balance(
        inp.cash_price,
        inp.periods,
        inp.installment_amount,
        monthly_rate,
        first_period_extra=inp.down_payment,
    )
    final_balance = simulation.final_balance

    verdict = Verdict.INSTALLMENT if final_balance >= 0 else Verdict.PAY_UPFRONT

    return ScenarioResult(
        kind=ScenarioKind.DOWN_PAYMENT_PLAN,
        summary={
            "cash_price": inp.cash_price,
            "down_payment": inp.down_payment,
            "installment_total": inp.down_payment + inp.installment_amount * inp.periods,
            "total_yield": simulation.total_yield,
            "final_balance": final_balance,
            "monthly_rate": monthly_rate,
        },
        ledger=simulation.ledger,
        verdict=verdict,
    )


def compare_installment_plans(inp: ComparePlansInput) -> ScenarioResult:
    """Scenario 4: cheaper of two installment plans by nominal total"""
    _check_periods(inp.periods_a, "periods_a")
    _check_periods(inp.periods_b, "periods_b")

    total_a = inp.amount_a * inp.periods_a
    total_b = inp.amount_b * inp.periods_b

    return ScenarioResult(
        kind=ScenarioKind.COMPARE_PLANS,
        summary={
            "total_a": total_a,
            "total_b": total_b,
            "difference": abs(total_a - total_b),
        },
        verdict=Verdict.OPTION_A if total_a < total_b else Verdict.OPTION_B,
    )


def evaluate_late_payment(inp: LatePaymentInput) -> ScenarioResult:
    """Scenario 5: amount due after a flat penalty plus simple daily interest"""
    penalty = percent_to_decimal(inp.penalty_pct)
    daily_interest = percent_to_decimal(inp.daily_interest_pct)

    penalty_amount = inp.original_amount * penalty
    interest_amount = inp.original_amount * daily_interest * inp.days_late
    corrected = inp.original_amount * (ONE + penalty + daily_interest * inp.days_late)

    return ScenarioResult(
        kind=ScenarioKind.LATE_PAYMENT,
        summary={
            "original_amount": inp.original_amount,
            "penalty_amount": penalty_amount,
            "interest_amount": interest_amount,
            "corrected_amount": corrected,
        },
    )


def evaluate_present_value(inp: PresentValueInput) -> ScenarioResult:
    """Scenario 6: what the installments are worth today under inflation"""
    _check_periods(inp.periods)

    monthly_inflation = inp.inflation.monthly_rate()
    nominal_total = inp.installment_amount * inp.periods
    value_today = present_value(inp.installment_amount, inp.periods, monthly_inflation)

    return ScenarioResult(
        kind=ScenarioKind.PRESENT_VALUE,
        summary={
            "nominal_total": nominal_total,
            "present_value": value_today,
            "inflation_discount": nominal_total - value_today,
            "monthly_inflation_rate": monthly_inflation,
        },
    )


def evaluate_alternative_investment(inp: AlternativeInvestmentInput) -> ScenarioResult:
    """Scenario 7: invest the cash price and pay the installments from it"""
    _check_periods(inp.periods)

    monthly_rate = _net_monthly_rate(inp.rate, inp.periods)
    simulation = simulate_running_balance(
        inp.cash_price, inp.periods, inp.installment_amount, monthly_rate
    )
    final_balance = simulation.final_balance

    verdict = Verdict.INVEST_AND_INSTALLMENT if final_balance > 0 else Verdict.PAY_UPFRONT

    return ScenarioResult(
        kind=ScenarioKind.ALTERNATIVE_INVESTMENT,
        summary={
            "cash_price": inp.cash_price,
            "installment_total": inp.installment_amount * inp.periods,
            "total_yield": simulation.total_yield,
            "final_balance": final_balance,
            "monthly_rate": monthly_rate,
        },
        ledger=simulation.ledger,
        verdict=verdict,
    )


EVALUATORS: Dict[ScenarioKind, Callable[[Any], ScenarioResult]] = {
    ScenarioKind.TOTAL_WITH_DISCOUNT: evaluate_total_with_discount,
    ScenarioKind.CASH_VS_FIXED_INSTALLMENTS: evaluate_cash_vs_installments,
    ScenarioKind.DOWN_PAYMENT_PLAN: evaluate_down_payment,
    ScenarioKind.COMPARE_PLANS: compare_installment_plans,
    ScenarioKind.LATE_PAYMENT: evaluate_late_payment,
    ScenarioKind.PRESENT_VALUE: evaluate_present_value,
    ScenarioKind.ALTERNATIVE_INVESTMENT: evaluate_alternative_investment,
}


def evaluate(kind: ScenarioKind, raw: Mapping[str, Any]) -> ScenarioResult:
    """
    Main entry point: validate raw inputs for `kind` and run its evaluator.

    Raises:
        ValidationError: first missing, non-numeric or out-of-range field
        PreconditionError: an installment count below 1
    """
    return EVALUATORS[kind](parse_input(kind, raw))
