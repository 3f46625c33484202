"""Prometheus metrics for the Credits Gateway service.

Metrics are organized into two categories:

Upstream Metrics (parent service health):
- gateway_upstream_requests_total: Upstream calls by operation/outcome
- gateway_upstream_latency_seconds: Upstream call latency
- gateway_upstream_failures_total: Upstream failures by kind

Gateway Metrics (Engineering/SRE dashboards):
- gateway_validation_failures_total: Requests rejected before dispatch
- gateway_http_requests_total: HTTP requests by endpoint/status
- gateway_http_request_latency_seconds: HTTP request latency
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Upstream Metrics
# =============================================================================

upstream_requests_total = Counter(
    "gateway_upstream_requests_total",
    "Total number of calls to the parent service",
    ["operation", "outcome"],  # success, rejected, failure
)

upstream_latency = Histogram(
    "gateway_upstream_latency_seconds",
    "Parent service call latency in seconds",
    ["operation"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 8.0, 10.0],
)

upstream_failures = Counter(
    "gateway_upstream_failures_total",
    "Total number of parent service failures",
    ["operation", "kind"],  # timeout, unreachable, rejected, protocol
)


# =============================================================================
# Gateway Metrics
# =============================================================================

validation_failures = Counter(
    "gateway_validation_failures_total",
    "Requests rejected before any upstream call",
    ["operation"],
)

http_requests_total = Counter(
    "gateway_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "gateway_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

@contextmanager
def track_upstream_latency(operation: str) -> Generator[None, None, None]:
    """Context manager to track parent service call latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        upstream_latency.labels(operation=operation).observe(duration)


def record_upstream_response(operation: str, status_code: int) -> None:
    """Record a completed upstream exchange."""
    if 200 <= status_code < 300:
        upstream_requests_total.labels(operation=operation, outcome="success").inc()
    else:
        upstream_requests_total.labels(operation=operation, outcome="rejected").inc()
        upstream_failures.labels(operation=operation, kind="rejected").inc()


def record_upstream_failure(operation: str, kind: str) -> None:
    """Record an upstream call that produced no usable response."""
    upstream_requests_total.labels(operation=operation, outcome="failure").inc()
    upstream_failures.labels(operation=operation, kind=kind).inc()


def record_upstream_protocol_error(operation: str) -> None:
    """Record a 2xx upstream answer whose body could not be used."""
    upstream_failures.labels(operation=operation, kind="protocol").inc()


def record_validation_failure(operation: str) -> None:
    """Record a request rejected before dispatch."""
    validation_failures.labels(operation=operation).inc()


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
