"""Prometheus metrics for monitoring scenario outcomes and reference rate fetches"""

from prometheus_client import Counter, Histogram

# Scenario metrics
scenario_evaluation_counter = Counter(
    "advisor_scenario_evaluations_total",
    "Total scenario evaluations",
    ["kind", "verdict"],
)

scenario_validation_failure_counter = Counter(
    "advisor_scenario_validation_failures_total",
    "Scenario requests rejected by input validation",
    ["kind"],
)

# Reference rate metrics
rate_fetch_latency_histogram = Histogram(
    "rate_fetch_latency_seconds",
    "Reference rate API response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

rate_fetch_failures_counter = Counter(
    "rate_fetch_failures_total",
    "Failed reference rate fetch attempts",
    ["benchmark"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_evaluation(kind: str, verdict: str | None) -> None:
    """Record scenario outcome; formula-only scenarios carry no verdict"""
    scenario_evaluation_counter.labels(kind=kind, verdict=verdict or "none").inc()
