"""GET /v1/rates/{benchmark} - latest reference rate converted to a monthly rate"""

import logging
from decimal import Decimal
from fastapi import APIRouter, Depends, HTTPException

from installment_advisor.api.dependencies import get_rate_client, get_request_id
from installment_advisor.api.v1.schemas import RateResponse
from installment_advisor.config import settings
from installment_advisor.domain.exceptions import RateSourceError
from installment_advisor.domain.rates import HUNDRED, monthly_to_annual
from installment_advisor.infrastructure.clients.rates import BENCHMARK_SERIES, ReferenceRateClient

router = APIRouter()


@router.get("/rates/{benchmark}", response_model=RateResponse)
async def get_reference_rate(
    benchmark: str,
    request_id: str = Depends(get_request_id),
    rate_client: ReferenceRateClient = Depends(get_rate_client),
):
    """
    Fetch the latest Selic, CDI or IPCA figure.

    The monthly percentage can be fed straight into a scenario's
    `yield_rate_pct` (or `inflation_rate_pct`) with the monthly basis.
    """
    benchmark = benchmark.lower()
    if benchmark not in BENCHMARK_SERIES:
        raise HTTPException(status_code=404, detail=f"Unknown benchmark: {benchmark}")

    try:
        reference = await rate_client.get_latest(benchmark)
    except RateSourceError as e:
        logging.error(f"Rate source error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Reference rate service unavailable")

    monthly_pct = reference.rate_spec.monthly_rate() * HUNDRED
    annual_pct = monthly_to_annual(monthly_pct) * HUNDRED
    precision = Decimal(1).scaleb(-settings.rate_places)

    return RateResponse(
        benchmark=reference.benchmark,
        reference_date=reference.reference_date,
        rate_pct=reference.rate_percent,
        period_basis=reference.period_basis.value,
        monthly_rate_pct=monthly_pct.quantize(precision),
        annual_rate_pct=annual_pct.quantize(precision),
    )
