"""Prometheus metrics for engine runs, failures, risk signals and provider calls"""

from prometheus_client import Counter, Histogram

# Engine metrics
engine_run_counter = Counter(
    "forecast_engine_runs_total",
    "Engine computations completed",
    ["operation"],  # kpis | liquidity_risk | comparison | drilldown | dashboard
)

engine_failure_counter = Counter(
    "forecast_engine_failures_total",
    "Engine computations rejected on input preconditions",
    ["operation", "error"],
)

risk_dates_histogram = Histogram(
    "forecast_liquidity_risk_dates",
    "At-risk dates flagged per classified series",
    buckets=[0, 1, 5, 10, 30, 60, 90],
)

# Provider metrics
provider_fetch_failures_counter = Counter(
    "forecast_provider_fetch_failures_total",
    "Failed forecast provider calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_engine_run(operation: str) -> None:
    engine_run_counter.labels(operation=operation).inc()


def record_engine_failure(operation: str, error: Exception) -> None:
    engine_failure_counter.labels(operation=operation, error=type(error).__name__).inc()


def record_risk_dates(count: int) -> None:
    """Record how many dates a classification flagged, for alerting on liquidity pressure"""
    risk_dates_histogram.observe(count)
