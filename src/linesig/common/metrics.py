"""Prometheus metrics for webhook signature checks."""

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.requests import Request
from starlette.responses import Response

SIGNATURE_CHECKS_TOTAL = Counter(
    "linesig_signature_checks_total",
    "Total webhook signature checks",
    ["outcome"],  # outcome: accepted, no_signature, invalid_signature
)

SIGNATURE_CHECK_LATENCY = Histogram(
    "linesig_signature_check_latency_seconds",
    "Time spent reading the body and verifying the signature",
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
)


def record_signature_check(outcome: str, latency: float) -> None:
    """Record the outcome of one signature check."""
    SIGNATURE_CHECKS_TOTAL.labels(outcome=outcome).inc()
    SIGNATURE_CHECK_LATENCY.observe(latency)


async def metrics_endpoint(_request: Request) -> Response:
    """Serve the default registry in Prometheus text format."""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
