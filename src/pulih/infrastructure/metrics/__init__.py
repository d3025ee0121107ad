"""Metrics infrastructure package."""

from pulih.infrastructure.metrics.prometheus_metrics import (
    # Journal metrics
    JOURNAL_MUTATIONS_TOTAL,
    JOURNAL_ANALYTICS_TOTAL,
    JOURNAL_ANALYTICS_ENTRIES,
    # Auth metrics
    AUTH_EVENTS_TOTAL,
    # API metrics
    HTTP_REQUESTS_TOTAL,
    HTTP_REQUEST_DURATION,
    RATE_LIMIT_EXCEEDED,
    # Helpers
    track_journal_mutation,
    track_analytics,
    track_auth_event,
    track_http_request,
    update_system_info,
    # Router
    metrics_router,
)

__all__ = [
    "JOURNAL_MUTATIONS_TOTAL",
    "JOURNAL_ANALYTICS_TOTAL",
    "JOURNAL_ANALYTICS_ENTRIES",
    "AUTH_EVENTS_TOTAL",
    "HTTP_REQUESTS_TOTAL",
    "HTTP_REQUEST_DURATION",
    "RATE_LIMIT_EXCEEDED",
    "track_journal_mutation",
    "track_analytics",
    "track_auth_event",
    "track_http_request",
    "update_system_info",
    "metrics_router",
]
