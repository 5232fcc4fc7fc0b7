"""Pydantic schemas for API responses"""

from pydantic import BaseModel, Field
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional


class LedgerRowSchema(BaseModel):
    """One month of a yield simulation"""

    period: int = Field(..., ge=1)
    opening_balance: Decimal
    period_yield: Decimal
    amount_paid: Decimal
    closing_balance: Decimal


class ScenarioResponse(BaseModel):
    """Response for POST /v1/scenarios/{kind}"""

    kind: str
    scenario_number: int
    verdict: Optional[str] = None
    summary: Dict[str, Decimal]
    ledger: List[LedgerRowSchema] = []


class ErrorDetail(BaseModel):
    """Structured validation failure naming the offending field"""

    field: str
    reason: str


class RateResponse(BaseModel):
    """Response for GET /v1/rates/{benchmark}"""

    benchmark: str
    reference_date: date
    rate_pct: Decimal
    period_basis: str
    monthly_rate_pct: Decimal
    annual_rate_pct: Decimal


class ScenarioErrorResponse(BaseModel):
    """422 body for POST /v1/scenarios/{kind}"""

    detail: ErrorDetail
