"""Prometheus metrics for monitoring projection volume, latency and shortfall risk"""

from decimal import Decimal
from typing import Optional
from prometheus_client import Counter, Histogram

# Projection metrics
projection_counter = Counter(
    "cashflow_projection_total",
    "Total cash flow projections generated",
    ["outcome"],  # ok | invalid | timeout | error
)

projected_events_histogram = Histogram(
    "cashflow_projected_events",
    "Projected events per projection",
    buckets=[0, 1, 2, 5, 10, 20, 50],
)

negative_lowest_point_counter = Counter(
    "cashflow_negative_lowest_point_total",
    "Projections whose lowest running balance is below zero",
)

projection_duration_histogram = Histogram(
    "cashflow_projection_duration_seconds",
    "Time spent computing a projection",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_projection(event_count: int, lowest_balance: Optional[Decimal], duration_seconds: float) -> None:
    """Record metrics for a successful projection"""
    projection_counter.labels(outcome="ok").inc()
    projected_events_histogram.observe(event_count)
    projection_duration_histogram.observe(duration_seconds)

    if lowest_balance is not None and lowest_balance < 0:
        negative_lowest_point_counter.inc()


def record_projection_failure(outcome: str) -> None:
    """Record a rejected or failed projection"""
    projection_counter.labels(outcome=outcome).inc()
