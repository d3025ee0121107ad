"""
Prometheus Metrics

Metrics for PULIH observability.
Exposes metrics at /metrics endpoint for Prometheus scraping.

ARCHITECTURE: Metrics are decoupled from business logic.
Only increment/observe; never block on metrics operations.
Labels never carry user identifiers or journal content.
"""

from prometheus_client import (
    Counter,
    Histogram,
    Info,
    generate_latest,
    CONTENT_TYPE_LATEST,
    REGISTRY,
)
from fastapi import APIRouter, Response

# =============================================================================
# JOURNAL METRICS
# =============================================================================

JOURNAL_MUTATIONS_TOTAL = Counter(
    "pulih_journal_mutations_total",
    "Journal entry mutations",
    ["operation"],  # create, update, delete, import
)

JOURNAL_ANALYTICS_TOTAL = Counter(
    "pulih_journal_analytics_total",
    "Monthly analytics computations",
    ["has_data"],  # true, false
)

JOURNAL_ANALYTICS_ENTRIES = Histogram(
    "pulih_journal_analytics_entries",
    "Entries aggregated per analytics computation",
    buckets=[0, 1, 5, 10, 20, 50, 100],
)

# =============================================================================
# AUTH METRICS
# =============================================================================

AUTH_EVENTS_TOTAL = Counter(
    "pulih_auth_events_total",
    "Authentication events",
    ["event", "outcome"],  # login/signup, success/failure
)

# =============================================================================
# API METRICS
# =============================================================================

HTTP_REQUESTS_TOTAL = Counter(
    "pulih_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

HTTP_REQUEST_DURATION = Histogram(
    "pulih_http_request_duration_seconds",
    "HTTP request duration",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

RATE_LIMIT_EXCEEDED = Counter(
    "pulih_rate_limit_exceeded_total",
    "Rate limit exceeded events",
    ["client_type"],  # ip, user
)

# =============================================================================
# SYSTEM INFO
# =============================================================================

SYSTEM_INFO = Info(
    "pulih_system",
    "PULIH system information",
)

SYSTEM_INFO.info({
    "version": "0.1.0",
    "environment": "development",  # Updated at runtime
})


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def track_journal_mutation(operation: str, amount: int = 1) -> None:
    """Record journal entry mutation(s)."""
    JOURNAL_MUTATIONS_TOTAL.labels(operation=operation).inc(amount)


def track_analytics(entry_count: int) -> None:
    """Record one analytics computation."""
    JOURNAL_ANALYTICS_TOTAL.labels(has_data=str(entry_count > 0).lower()).inc()
    JOURNAL_ANALYTICS_ENTRIES.observe(entry_count)


def track_auth_event(event: str, success: bool) -> None:
    """Record login/signup outcome."""
    AUTH_EVENTS_TOTAL.labels(event=event, outcome="success" if success else "failure").inc()


def track_http_request(method: str, endpoint: str, status_code: int, duration: float) -> None:
    """Record a completed HTTP request."""
    HTTP_REQUESTS_TOTAL.labels(method=method, endpoint=endpoint, status_code=str(status_code)).inc()
    HTTP_REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(duration)


def update_system_info(environment: str, version: str = "0.1.0") -> None:
    """Update system info metric with current environment."""
    SYSTEM_INFO.info({
        "version": version,
        "environment": environment,
    })


# =============================================================================
# METRICS ENDPOINT
# =============================================================================

metrics_router = APIRouter(tags=["metrics"])


@metrics_router.get("/metrics")
async def metrics() -> Response:
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus text format for scraping.
    """
    return Response(
        content=generate_latest(REGISTRY),
        media_type=CONTENT_TYPE_LATEST,
    )
