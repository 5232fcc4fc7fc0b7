"""Unit tests for the seven scenario evaluators"""

import pytest
from decimal import Decimal
from installment_advisor.domain.exceptions import PreconditionError
from installment_advisor.domain.models import (
    AlternativeInvestmentInput,
    CashVsInstallmentsInput,
    ComparePlansInput,
    DownPaymentInput,
    InterestMode,
    LatePaymentInput,
    PresentValueInput,
    RateSpec,
    ScenarioKind,
    TotalWithDiscountInput,
    Verdict,
)
from installment_advisor.domain.scenarios import (
    compare_installment_plans,
    evaluate,
    evaluate_alternative_investment,
    evaluate_cash_vs_installments,
    evaluate_down_payment,
    evaluate_late_payment,
    evaluate_present_value,
    evaluate_total_with_discount,
)


def test_total_with_discount_installment_wins(one_percent):
    """R$ 1200 in 12x, 5% off in cash: yield of 78 beats the 60 discount"""
    result = evaluate_total_with_discount(
        TotalWithDiscountInput(
            total_price=Decimal("1200"),
            periods=12,
            rate=one_percent,
            cash_discount_pct=Decimal("5"),
        )
    )

    assert result.summary["cash_price"] == Decimal("1140")
    assert result.summary["installment_amount"] == Decimal("100")
    assert result.summary["total_yield"] == Decimal("78")
    assert result.summary["effective_installment_cost"] == Decimal("1122")
    assert result.verdict is Verdict.INSTALLMENT
    assert len(result.ledger) == 12


def test_total_with_discount_cash_wins(one_percent):
    """A 10% discount (120) is worth more than the yield (78)"""
    result = evaluate_total_with_discount(
        TotalWithDiscountInput(
            total_price=Decimal("1200"),
            periods=12,
            rate=one_percent,
            cash_discount_pct=Decimal("10"),
        )
    )

    assert result.summary["cash_price"] == Decimal("1080")
    assert result.verdict is Verdict.PAY_UPFRONT


def test_total_with_discount_interest_bearing_installments(one_percent):
    """1% a.m. simple interest on the plan: 1200 -> 1344 paid as 12 x 112"""
    result = evaluate_total_with_discount(
        TotalWithDiscountInput(
            total_price=Decimal("1200"),
            periods=12,
            rate=one_percent,
            cash_discount_pct=Decimal("5"),
            installment_interest_pct=Decimal("1"),
            interest_mode=InterestMode.SIMPLE,
        )
    )

    assert result.summary["installment_total"] == Decimal("1344")
    assert result.summary["installment_amount"] == Decimal("112")
    assert result.summary["total_yield"] == Decimal("87.36")
    assert result.verdict is Verdict.PAY_UPFRONT


def test_cash_vs_installments(one_percent):
    """3 x 100 with 6 of yield costs 294 > 280 in cash"""
    result = evaluate_cash_vs_installments(
        CashVsInstallmentsInput(
            cash_price=Decimal("280"),
            periods=3,
            installment_amount=Decimal("100"),
            rate=one_percent,
        )
    )

    assert result.summary["installment_total"] == Decimal("300")
    assert result.summary["total_yield"] == Decimal("6")
    assert result.summary["effective_installment_cost"] == Decimal("294")
    assert result.verdict is Verdict.PAY_UPFRONT


def test_cash_vs_installments_tie_goes_to_installment(one_percent):
    result = evaluate_cash_vs_installments(
        CashVsInstallmentsInput(
            cash_price=Decimal("294"),
            periods=3,
            installment_amount=Decimal("100"),
            rate=one_percent,
        )
    )
    assert result.verdict is Verdict.INSTALLMENT


def test_cash_vs_installments_with_income_tax(one_percent_taxed):
    """3 months held -> 22.5% withheld, 1% becomes 0.775%"""
    result = evaluate_cash_vs_installments(
        CashVsInstallmentsInput(
            cash_price=Decimal("295"),
            periods=3,
            installment_amount=Decimal("100"),
            rate=one_percent_taxed,
        )
    )

    assert result.summary["monthly_rate"] == Decimal("0.00775")
    assert result.summary["total_yield"] == Decimal("4.65")
    assert result.summary["effective_installment_cost"] == Decimal("295.35")
    assert result.verdict is Verdict.PAY_UPFRONT


def test_down_payment_plan_covered_by_investment(one_percent):
    result = evaluate_down_payment(
        DownPaymentInput(
            cash_price=Decimal("1000"),
            down_payment=Decimal("200"),
            periods=4,
            installment_amount=Decimal("200"),
            rate=one_percent,
        )
    )

    assert result.summary["installment_total"] == Decimal("1000")
    assert result.summary["final_balance"] == Decimal("22.46361")
    assert result.verdict is Verdict.INSTALLMENT
    assert len(result.ledger) == 4


def test_down_payment_plan_not_covered():
    result = evaluate_down_payment(
        DownPaymentInput(
            cash_price=Decimal("1000"),
            down_payment=Decimal("300"),
            periods=4,
            installment_amount=Decimal("200"),
            rate=RateSpec(Decimal("0")),
        )
    )

    assert result.summary["final_balance"] == Decimal("-100")
    assert result.verdict is Verdict.PAY_UPFRONT


def test_compare_plans_is_rate_independent():
    result = compare_installment_plans(
        ComparePlansInput(periods_a=3, amount_a=Decimal("100"), periods_b=2, amount_b=Decimal("200"))
    )

    assert result.summary["total_a"] == Decimal("300")
    assert result.summary["total_b"] == Decimal("400")
    assert result.summary["difference"] == Decimal("100")
    assert result.verdict is Verdict.OPTION_A
    assert result.ledger == ()


def test_compare_plans_tie_goes_to_option_b():
    result = compare_installment_plans(
        ComparePlansInput(periods_a=4, amount_a=Decimal("50"), periods_b=2, amount_b=Decimal("100"))
    )
    assert result.verdict is Verdict.OPTION_B


def test_late_payment():
    """100 * (1 + 0.02 + 0.001 * 10)"""
    result = evaluate_late_payment(
        LatePaymentInput(
            original_amount=Decimal("100"),
            days_late=10,
            penalty_pct=Decimal("2"),
            daily_interest_pct=Decimal("0.1"),
        )
    )

    assert result.summary["corrected_amount"] == Decimal("103.00")
    assert result.summary["penalty_amount"] == Decimal("2")
    assert result.summary["interest_amount"] == Decimal("1")
    assert result.verdict is None
    assert result.ledger == ()


def test_present_value_under_inflation():
    result = evaluate_present_value(
        PresentValueInput(periods=2, installment_amount=Decimal("100"), inflation=RateSpec(Decimal("10")))
    )

    assert result.summary["present_value"].quantize(Decimal("0.01")) == Decimal("173.55")
    assert result.summary["nominal_total"] == Decimal("200")
    assert result.summary["inflation_discount"].quantize(Decimal("0.01")) == Decimal("26.45")
    assert result.verdict is None


def test_alternative_investment_pays_for_itself(one_percent):
    result = evaluate_alternative_investment(
        AlternativeInvestmentInput(
            cash_price=Decimal("1000"),
            periods=4,
            installment_amount=Decimal("255"),
            rate=one_percent,
        )
    )

    assert result.summary["final_balance"] == Decimal("5.201755")
    assert result.verdict is Verdict.INVEST_AND_INSTALLMENT


def test_alternative_investment_zero_balance_pays_upfront():
    result = evaluate_alternative_investment(
        AlternativeInvestmentInput(
            cash_price=Decimal("1000"),
            periods=4,
            installment_amount=Decimal("250"),
            rate=RateSpec(Decimal("0")),
        )
    )

    assert result.summary["final_balance"] == 0
    assert result.verdict is Verdict.PAY_UPFRONT


def test_typed_input_with_zero_periods_fails_before_dividing(one_percent):
    with pytest.raises(PreconditionError) as exc:
        evaluate_total_with_discount(
            TotalWithDiscountInput(total_price=Decimal("100"), periods=0, rate=one_percent)
        )
    assert exc.value.field == "periods"


def test_evaluate_dispatches_raw_input():
    result = evaluate(
        ScenarioKind.COMPARE_PLANS,
        {"periods_a": "3", "amount_a": "100", "periods_b": 2, "amount_b": 200},
    )
    assert result.kind is ScenarioKind.COMPARE_PLANS
    assert result.verdict is Verdict.OPTION_A


def test_evaluators_are_pure(one_percent):
    """Same input, same output"""
    inp = CashVsInstallmentsInput(
        cash_price=Decimal("280"), periods=3, installment_amount=Decimal("100"), rate=one_percent
    )
    assert evaluate_cash_vs_installments(inp) == evaluate_cash_vs_installments(inp)
