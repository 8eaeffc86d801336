"""Prometheus metrics for monitoring wait time decisions, transactions and node calls"""

from prometheus_client import Counter, Histogram, Gauge

from algo_compounder.domain.models import WaitTimeRecommendation

# Decision metrics
search_counter = Counter(
    "compounder_search_total",
    "Wait time searches run",
    ["outcome"],  # found | not_found
)

wait_seconds_gauge = Gauge(
    "compounder_wait_seconds",
    "Most recent recommended wait before collecting rewards",
)

balance_gauge = Gauge(
    "compounder_balance_algos",
    "Most recent observed account balance",
)

# Transaction metrics
cycle_counter = Counter(
    "compounder_cycles_total",
    "Compounding cycles run",
    ["outcome"],  # confirmed | failed
)

confirmation_failure_counter = Counter(
    "compounder_confirmation_failures_total",
    "Transactions that did not confirm",
    ["reason"],  # rejected | timeout
)

# Algod metrics
algod_latency_histogram = Histogram(
    "algod_request_latency_seconds",
    "Algod node response time",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

algod_failure_counter = Counter(
    "algod_request_failures_total",
    "Failed algod node calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_recommendation(recommendation: WaitTimeRecommendation) -> None:
    """Record wait time search outcome and the chosen wait"""
    outcome = "found" if recommendation.found else "not_found"
    search_counter.labels(outcome=outcome).inc()
    wait_seconds_gauge.set(recommendation.wait_seconds)
