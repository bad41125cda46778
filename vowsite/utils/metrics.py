"""
Prometheus-based metrics for production monitoring.
Provides /metrics endpoint for scraping.
"""
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import APIRouter, Response


# Counters
vows_published_total = Counter(
    "vows_published_total",
    "Total number of successful vow publishes",
)

gate_transitions_total = Counter(
    "gate_transitions_total",
    "Total unlock gate writes",
    ["state"],  # locked, unlocked
)

admin_auth_failures_total = Counter(
    "admin_auth_failures_total",
    "Total rejected admin credentials",
    ["reason"],  # invalid, rate_limited
)

storage_errors_total = Counter(
    "storage_errors_total",
    "Total storage operations rolled back",
    ["operation"],
)

# Histograms
http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration",
    ["method", "status"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1, 2, 5],
)


# Metrics endpoint router
router = APIRouter()


@router.get("/metrics")
def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint for scraping."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
