"""Domain models - pure Python dataclasses representing scenario inputs and results"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional, Tuple

from installment_advisor.domain.rates import annual_to_monthly, percent_to_decimal


class RateBasis(str, Enum):
    """Period a nominal rate percentage refers to"""

    MONTHLY = "monthly"
    ANNUAL = "annual"


class InterestMode(str, Enum):
    """How interest accrues on an interest-bearing installment plan"""

    SIMPLE = "simple"
    COMPOUND = "compound"


class Verdict(str, Enum):
    """Outcome of a comparison scenario"""

    PAY_UPFRONT = "pay_upfront"
    INSTALLMENT = "installment"
    OPTION_A = "option_a"
    OPTION_B = "option_b"
    INVEST_AND_INSTALLMENT = "invest_and_installment"


class ScenarioKind(Enum):
    """The seven supported calculation scenarios"""

    TOTAL_WITH_DISCOUNT = 1
    CASH_VS_FIXED_INSTALLMENTS = 2
    DOWN_PAYMENT_PLAN = 3
    COMPARE_PLANS = 4
    LATE_PAYMENT = 5
    PRESENT_VALUE = 6
    ALTERNATIVE_INVESTMENT = 7

    @property
    def slug(self) -> str:
        return _KIND_SLUGS[self]

    @classmethod
    def from_identifier(cls, identifier: str) -> "ScenarioKind":
        """Resolve a kind from its number ("1".."7") or its slug"""
        if identifier.isdigit():
            return cls(int(identifier))
        for kind, slug in _KIND_SLUGS.items():
            if slug == identifier:
                return kind
        raise ValueError(f"Unknown scenario kind: {identifier!r}")


_KIND_SLUGS = {
    ScenarioKind.TOTAL_WITH_DISCOUNT: "total-with-discount",
    ScenarioKind.CASH_VS_FIXED_INSTALLMENTS: "cash-vs-installments",
    ScenarioKind.DOWN_PAYMENT_PLAN: "down-payment",
    ScenarioKind.COMPARE_PLANS: "compare-plans",
    ScenarioKind.LATE_PAYMENT: "late-payment",
    ScenarioKind.PRESENT_VALUE: "present-value",
    ScenarioKind.ALTERNATIVE_INVESTMENT: "invest-alternative",
}


@dataclass(frozen=True)
class RateSpec:
    """Nominal rate as entered by the user, before conversion"""

    nominal_rate_percent: Decimal
    period_basis: RateBasis = RateBasis.MONTHLY
    consider_income_tax: bool = False

    def monthly_rate(self) -> Decimal:
        """Monthly decimal rate (0.01 == 1% a.m.), before any tax adjustment"""
        if self.period_basis is RateBasis.ANNUAL:
            return annual_to_monthly(self.nominal_rate_percent)
        return percent_to_decimal(self.nominal_rate_percent)


@dataclass(frozen=True)
class ReferenceRate:
    """Latest published value of a benchmark series (Selic, CDI, IPCA)"""

    benchmark: str
    reference_date: date
    rate_percent: Decimal
    period_basis: RateBasis

    @property
    def rate_spec(self) -> RateSpec:
        return RateSpec(nominal_rate_percent=self.rate_percent, period_basis=self.period_basis)


@dataclass(frozen=True)
class LedgerRow:
    """One period of a simulation"""

    period: int
    opening_balance: Decimal
    period_yield: Decimal
    amount_paid: Decimal
    closing_balance: Decimal


@dataclass(frozen=True)
class ScenarioResult:
    """Output of a scenario evaluator"""

    kind: ScenarioKind
    summary: Dict[str, Decimal]
    ledger: Tuple[LedgerRow, ...] = ()
    verdict: Optional[Verdict] = None


# Scenario input records, one per kind


@dataclass(frozen=True)
class TotalWithDiscountInput:
    total_price: Decimal
    periods: int
    rate: RateSpec
    cash_discount_pct: Decimal = Decimal("0")
    installment_interest_pct: Decimal = Decimal("0")
    interest_mode: InterestMode = InterestMode.COMPOUND


@dataclass(frozen=True)
class CashVsInstallmentsInput:
    cash_price: Decimal
    periods: int
    installment_amount: Decimal
    rate: RateSpec


@dataclass(frozen=True)
class DownPaymentInput:
    cash_price: Decimal
    down_payment: Decimal
    periods: int
    installment_amount: Decimal
    rate: RateSpec


@dataclass(frozen=True)
class ComparePlansInput:
    periods_a: int
    amount_a: Decimal
    periods_b: int
    amount_b: Decimal


@dataclass(frozen=True)
class LatePaymentInput:
    original_amount: Decimal
    days_late: int
    penalty_pct: Decimal
    daily_interest_pct: Decimal


@dataclass(frozen=True)
class PresentValueInput:
    periods: int
    installment_amount: Decimal
    inflation: RateSpec


@dataclass(frozen=True)
class AlternativeInvestmentInput:
    cash_price: Decimal
    periods: int
    installment_amount: Decimal
    rate: RateSpec


@dataclass(frozen=True)
class YieldSimulation:
    """Total yield plus the month-by-month ledger that produced it"""

    total_yield: Decimal
    ledger: Tuple[LedgerRow, ...] = field(default_factory=tuple)

    @property
    def final_balance(self) -> Decimal:
        return self.ledger[-1].closing_balance if self.ledger else Decimal("0")
