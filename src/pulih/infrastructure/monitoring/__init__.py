"""Monitoring infrastructure package."""

from pulih.infrastructure.monitoring.sentry_integration import (
    init_sentry,
    before_send,
    capture_exception_with_context,
)

__all__ = [
    "init_sentry",
    "before_send",
    "capture_exception_with_context",
]
