"""Prometheus metric definitions for the payment API."""

from prometheus_client import Counter, Histogram, generate_latest
from starlette.responses import Response


provider_operations_total = Counter(
    "provider_operations_total",
    "Provider operations by outcome",
    ["service", "provider", "operation", "outcome"],
)
provider_latency_seconds = Histogram(
    "provider_latency_seconds",
    "Provider operation latency seconds",
    ["service", "provider", "operation"],
)
payment_cancelled_total = Counter("payment_cancelled_total", "Payments cancelled by the user", ["service"])
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["service", "route", "method", "status_code"],
)
http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration seconds",
    ["service", "route", "method"],
)


def metrics_response() -> Response:
    """Expose all registered Prometheus metrics in text format."""

    return Response(content=generate_latest(), media_type="text/plain")
