"""Reference rate HTTP client (Banco Central do Brasil SGS) with retry logic"""

import asyncio
import httpx
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Dict, Tuple

from installment_advisor.config import settings
from installment_advisor.domain.exceptions import RateSourceError
from installment_advisor.domain.models import RateBasis, ReferenceRate
from installment_advisor.infrastructure.observability.metrics import (
    rate_fetch_failures_counter,
    rate_fetch_latency_histogram,
)

# benchmark -> (SGS series code, basis of the published value)
BENCHMARK_SERIES: Dict[str, Tuple[int, RateBasis]] = {
    "selic": (1178, RateBasis.ANNUAL),
    "cdi": (4389, RateBasis.ANNUAL),
    "ipca": (433, RateBasis.MONTHLY),
}


class ReferenceRateClient:
    """Client for the public SGS time-series API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.rates_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.max_attempts = settings.rate_fetch_max_attempts
        self.backoff_base = settings.rate_fetch_backoff_base
        self.transport = transport

    async def get_latest(self, benchmark: str) -> ReferenceRate:
        """
        Fetch the most recent value of a benchmark series.

        Retry strategy:
        - Up to `rate_fetch_max_attempts` attempts (default: one retry)
        - Exponential backoff between attempts (base * 2^(attempt-1))
        - Retries on timeouts, 5xx/4xx responses and network failures;
          a malformed payload is not retried

        Raises:
            ValueError: unknown benchmark
            RateSourceError: upstream unavailable after retries, or invalid payload
        """
        if benchmark not in BENCHMARK_SERIES:
            raise ValueError(f"Unknown benchmark: {benchmark!r}")

        code, basis = BENCHMARK_SERIES[benchmark]
        url = f"{self.base_url}/dados/serie/bcdata.sgs.{code}/dados/ultimos/1"

        attempt = 0
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            while True:
                try:
                    with rate_fetch_latency_histogram.time():
                        response = await client.get(url, params={"formato": "json"})
                        response.raise_for_status()
                    break

                except (httpx.HTTPStatusError, httpx.RequestError) as e:
                    attempt += 1
                    rate_fetch_failures_counter.labels(benchmark=benchmark).inc()

                    if attempt >= self.max_attempts:
                        if isinstance(e, httpx.TimeoutException):
                            raise RateSourceError(f"Rate API timeout after {self.timeout}s") from e
                        if isinstance(e, httpx.HTTPStatusError):
                            raise RateSourceError(f"Rate API error: {e.response.status_code}") from e
                        raise RateSourceError(f"Rate API unreachable: {e}") from e

                    backoff = self.backoff_base * (2 ** (attempt - 1))
                    await asyncio.sleep(backoff)

        # A 200 with a non-JSON body (e.g. a maintenance page) is not retried
        try:
            data = response.json()
        except ValueError as e:
            raise RateSourceError(f"Invalid rate data from SGS: {e}") from e

        return self._parse(benchmark, basis, data)

    @staticmethod
    def _parse(benchmark: str, basis: RateBasis, data) -> ReferenceRate:
        # SGS payload: [{"data": "dd/mm/yyyy", "valor": "10.40"}]
        try:
            latest = data[-1]
            return ReferenceRate(
                benchmark=benchmark,
                reference_date=datetime.strptime(latest["data"], "%d/%m/%Y").date(),
                rate_percent=Decimal(str(latest["valor"])),
                period_basis=basis,
            )
        except (IndexError, KeyError, TypeError, ValueError, InvalidOperation) as e:
            raise RateSourceError(f"Invalid rate data from SGS: {e}") from e
