"""POST /v1/scenarios/{kind} - evaluate a pay-upfront vs installments scenario"""

import time
import logging
from decimal import Decimal, localcontext
from typing import Any, Dict
from fastapi import APIRouter, Body, Depends, HTTPException

from installment_advisor.api.dependencies import get_request_id
from installment_advisor.api.v1.schemas import ErrorDetail, LedgerRowSchema, ScenarioErrorResponse, ScenarioResponse
from installment_advisor.config import settings
from installment_advisor.domain.exceptions import PreconditionError, ValidationError
from installment_advisor.domain.models import ScenarioKind, ScenarioResult
from installment_advisor.domain.scenarios import evaluate
from installment_advisor.infrastructure.observability.logging import log_evaluation
from installment_advisor.infrastructure.observability.metrics import (
    record_evaluation,
    scenario_validation_failure_counter,
)

router = APIRouter()


def _round(key: str, value: Decimal) -> Decimal:
    places = settings.rate_places if "rate" in key else settings.money_places
    # Quantizing needs a digit for every place left of and right of the point
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + places + 2)
        return value.quantize(Decimal(1).scaleb(-places))


def to_response(result: ScenarioResult) -> ScenarioResponse:
    """Render a ScenarioResult with money at cents and rates at rate precision"""
    return ScenarioResponse(
        kind=result.kind.slug,
        scenario_number=result.kind.value,
        verdict=result.verdict.value if result.verdict else None,
        summary={key: _round(key, value) for key, value in result.summary.items()},
        ledger=[
            LedgerRowSchema(
                period=row.period,
                opening_balance=_round("opening_balance", row.opening_balance),
                period_yield=_round("period_yield", row.period_yield),
                amount_paid=_round("amount_paid", row.amount_paid),
                closing_balance=_round("closing_balance", row.closing_balance),
            )
            for row in result.ledger
        ],
    )


@router.post(
    "/scenarios/{kind}",
    response_model=ScenarioResponse,
    responses={422: {"model": ScenarioErrorResponse, "description": "Invalid scenario input"}},
)
def create_evaluation(
    kind: str,
    payload: Dict[str, Any] = Body(...),
    request_id: str = Depends(get_request_id),
):
    """
    Evaluate one of the seven scenarios.

    `kind` is the scenario number (1-7) or its slug, e.g. `cash-vs-installments`.
    The body carries the raw field values; rates are whole percentages.
    """
    try:
        scenario_kind = ScenarioKind.from_identifier(kind)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown scenario: {kind}")

    start_time = time.perf_counter()

    try:
        result = evaluate(scenario_kind, payload)
    except (ValidationError, PreconditionError) as e:
        scenario_validation_failure_counter.labels(kind=scenario_kind.slug).inc()
        logging.warning(f"Invalid scenario input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=ErrorDetail(field=e.field, reason=e.reason).model_dump())

    response = to_response(result)

    verdict = result.verdict.value if result.verdict else None
    duration_ms = (time.perf_counter() - start_time) * 1000
    record_evaluation(scenario_kind.slug, verdict)
    log_evaluation(request_id, scenario_kind.slug, verdict, duration_ms)

    return response
