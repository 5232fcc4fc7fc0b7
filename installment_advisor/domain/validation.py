"""Raw input -> typed scenario records, failing on the first violated contract"""

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Type, TypeVar

from installment_advisor.domain.exceptions import PreconditionError, ValidationError
from installment_advisor.domain.models import (
    AlternativeInvestmentInput,
    CashVsInstallmentsInput,
    ComparePlansInput,
    DownPaymentInput,
    InterestMode,
    LatePaymentInput,
    PresentValueInput,
    RateBasis,
    RateSpec,
    ScenarioKind,
    TotalWithDiscountInput,
)

E = TypeVar("E", bound=Enum)

_MISSING = object()
# Inputs at or above this are rejected before any arithmetic can overflow
MAX_MAGNITUDE = Decimal("1e30")
# 100 years of monthly installments
MAX_PERIODS = 1200

_TRUE_STRINGS = {"true", "yes", "y", "s", "sim", "1"}
_FALSE_STRINGS = {"false", "no", "n", "nao", "não", "0"}


def _lookup(raw: Mapping[str, Any], field: str) -> Any:
    value = raw.get(field, _MISSING)
    if value is None or (isinstance(value, str) and not value.strip()):
        return _MISSING
    return value


def _to_decimal(value: Any, field: str) -> Decimal:
    # bool is an int subclass; a checkbox value is never a number
    if isinstance(value, bool):
        raise ValidationError(field, "must be numeric")

    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float)):
        number = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if "," in text and "." not in text:
            text = text.replace(",", ".")
        try:
            number = Decimal(text)
        except InvalidOperation:
            raise ValidationError(field, "must be numeric")
    else:
        raise ValidationError(field, "must be numeric")

    if not number.is_finite():
        raise ValidationError(field, "must be numeric")
    if abs(number) >= MAX_MAGNITUDE:
        raise ValidationError(field, "out of range")
    return number


def require_decimal(raw: Mapping[str, Any], field: str) -> Decimal:
    """Required non-negative decimal"""
    value = _lookup(raw, field)
    if value is _MISSING:
        raise ValidationError(field, "required")

    number = _to_decimal(value, field)
    if number < 0:
        raise ValidationError(field, "must be non-negative")
    return number


def optional_decimal(raw: Mapping[str, Any], field: str, default: Decimal = Decimal("0")) -> Decimal:
    if _lookup(raw, field) is _MISSING:
        return default
    return require_decimal(raw, field)


def require_int(raw: Mapping[str, Any], field: str) -> int:
    """Required non-negative integer"""
    number = require_decimal(raw, field)
    if number != number.to_integral_value():
        raise ValidationError(field, "must be an integer")
    return int(number)


def require_periods(raw: Mapping[str, Any], field: str = "periods") -> int:
    """Installment count; zero would divide by zero downstream"""
    periods = require_int(raw, field)
    if periods < 1:
        raise PreconditionError(field, "must be at least 1")
    if periods > MAX_PERIODS:
        raise ValidationError(field, f"must be at most {MAX_PERIODS}")
    return periods


def optional_bool(raw: Mapping[str, Any], field: str, default: bool = False) -> bool:
    value = _lookup(raw, field)
    if value is _MISSING:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise ValidationError(field, "must be a boolean")


def optional_enum(raw: Mapping[str, Any], field: str, enum_cls: Type[E], default: E) -> E:
    value = _lookup(raw, field)
    if value is _MISSING:
        return default
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        raise ValidationError(field, f"must be one of: {choices}")


def parse_rate(
    raw: Mapping[str, Any],
    percent_field: str = "yield_rate_pct",
    basis_field: str = "rate_basis",
    tax_field: str | None = "consider_income_tax",
) -> RateSpec:
    """Build a RateSpec from its raw fields (percentage, basis, tax flag)"""
    return RateSpec(
        nominal_rate_percent=require_decimal(raw, percent_field),
        period_basis=optional_enum(raw, basis_field, RateBasis, RateBasis.MONTHLY),
        consider_income_tax=optional_bool(raw, tax_field) if tax_field else False,
    )


def _total_with_discount(raw: Mapping[str, Any]) -> TotalWithDiscountInput:
    return TotalWithDiscountInput(
        total_price=require_decimal(raw, "total_price"),
        periods=require_periods(raw),
        rate=parse_rate(raw),
        cash_discount_pct=optional_decimal(raw, "cash_discount_pct"),
        installment_interest_pct=optional_decimal(raw, "installment_interest_pct"),
        interest_mode=optional_enum(raw, "interest_mode", InterestMode, InterestMode.COMPOUND),
    )


def _cash_vs_installments(raw: Mapping[str, Any]) -> CashVsInstallmentsInput:
    return CashVsInstallmentsInput(
        cash_price=require_decimal(raw, "cash_price"),
        periods=require_periods(raw),
        installment_amount=require_decimal(raw, "installment_amount"),
        rate=parse_rate(raw),
    )


def _down_payment(raw: Mapping[str, Any]) -> DownPaymentInput:
    return DownPaymentInput(
        cash_price=require_decimal(raw, "cash_price"),
        down_payment=require_decimal(raw, "down_payment"),
        periods=require_periods(raw),
        installment_amount=require_decimal(raw, "installment_amount"),
        rate=parse_rate(raw),
    )


def _compare_plans(raw: Mapping[str, Any]) -> ComparePlansInput:
    return ComparePlansInput(
        periods_a=require_periods(raw, "periods_a"),
        amount_a=require_decimal(raw, "amount_a"),
        periods_b=require_periods(raw, "periods_b"),
        amount_b=require_decimal(raw, "amount_b"),
    )


def _late_payment(raw: Mapping[str, Any]) -> LatePaymentInput:
    return LatePaymentInput(
        original_amount=require_decimal(raw, "original_amount"),
        days_late=require_int(raw, "days_late"),
        penalty_pct=require_decimal(raw, "penalty_pct"),
        daily_interest_pct=require_decimal(raw, "daily_interest_pct"),
    )


def _present_value(raw: Mapping[str, Any]) -> PresentValueInput:
    return PresentValueInput(
        periods=require_periods(raw),
        installment_amount=require_decimal(raw, "installment_amount"),
        inflation=parse_rate(raw, "inflation_rate_pct", "inflation_basis", tax_field=None),
    )


def _alternative_investment(raw: Mapping[str, Any]) -> AlternativeInvestmentInput:
    return AlternativeInvestmentInput(
        cash_price=require_decimal(raw, "cash_price"),
        periods=require_periods(raw),
        installment_amount=require_decimal(raw, "installment_amount"),
        rate=parse_rate(raw),
    )


PARSERS: Dict[ScenarioKind, Callable[[Mapping[str, Any]], Any]] = {
    ScenarioKind.TOTAL_WITH_DISCOUNT: _total_with_discount,
    ScenarioKind.CASH_VS_FIXED_INSTALLMENTS: _cash_vs_installments,
    ScenarioKind.DOWN_PAYMENT_PLAN: _down_payment,
    ScenarioKind.COMPARE_PLANS: _compare_plans,
    ScenarioKind.LATE_PAYMENT: _late_payment,
    ScenarioKind.PRESENT_VALUE: _present_value,
    ScenarioKind.ALTERNATIVE_INVESTMENT: _alternative_investment,
}


def parse_input(kind: ScenarioKind, raw: Mapping[str, Any]):
    """
    Validate raw field values for a scenario and build its input record.

    Raises:
        ValidationError: field missing, non-numeric, negative or not an allowed value
        PreconditionError: an installment count below 1
    """
    return PARSERS[kind](raw)
