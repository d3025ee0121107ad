"""
Sentry Error Tracking Integration

Error tracking with sensitive data scrubbing.

SECURITY: Credentials and journal free text are stripped before
anything is sent to Sentry.
"""

import re
from typing import Optional

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from pulih.config.logging_config import get_logger

logger = get_logger(__name__)

# Patterns for sensitive data scrubbing
SENSITIVE_PATTERNS = [
    r"password[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"token[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"secret[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"bearer\s+[a-zA-Z0-9\-._~+/]+=*",
    r"authorization[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
]

SENSITIVE_KEYS = frozenset({
    "password",
    "token",
    "secret",
    "authorization",
    "bearer",
    "credential",
    "jwt",
    # Journal free text
    "triggers",
    "symptoms",
    "strategies",
    "notes",
})


def _scrub_string(value: str) -> str:
    """Scrub sensitive patterns from string."""
    result = value
    for pattern in SENSITIVE_PATTERNS:
        result = re.sub(pattern, "[REDACTED]", result, flags=re.IGNORECASE)
    return result


def _scrub_dict(data: dict) -> dict:
    """Recursively scrub sensitive data from dictionary."""
    result = {}
    for key, value in data.items():
        key_lower = str(key).lower().replace("-", "_")

        if any(sensitive in key_lower for sensitive in SENSITIVE_KEYS):
            result[key] = "[REDACTED]"
        elif isinstance(value, dict):
            result[key] = _scrub_dict(value)
        elif isinstance(value, list):
            result[key] = [
                _scrub_dict(item) if isinstance(item, dict)
                else _scrub_string(item) if isinstance(item, str)
                else item
                for item in value
            ]
        elif isinstance(value, str):
            result[key] = _scrub_string(value)
        else:
            result[key] = value

    return result


def before_send(event: dict, hint: dict) -> Optional[dict]:
    """
    Process event before sending to Sentry.

    Scrubs request bodies, headers and extra context.
    """
    request = event.get("request")
    if request:
        if isinstance(request.get("data"), dict):
            request["data"] = _scrub_dict(request["data"])
        elif "data" in request:
            request["data"] = "[REDACTED]"
        if isinstance(request.get("headers"), dict):
            request["headers"] = _scrub_dict(request["headers"])

    if "extra" in event:
        event["extra"] = _scrub_dict(event["extra"])

    return event


def init_sentry(
    dsn: str,
    environment: str = "development",
    release: str = "pulih@0.1.0",
    traces_sample_rate: float = 0.1,
) -> bool:
    """
    Initialize Sentry error tracking.

    Args:
        dsn: Sentry DSN
        environment: Environment name
        release: Release version
        traces_sample_rate: Performance tracing rate

    Returns:
        True if Sentry was initialized
    """
    if not dsn:
        logger.info("Sentry DSN not configured, error tracking disabled")
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=release,
        traces_sample_rate=traces_sample_rate,
        before_send=before_send,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
            LoggingIntegration(level=None, event_level=None),
        ],
        send_default_pii=False,
        max_breadcrumbs=50,
    )

    logger.info(
        "Sentry initialized",
        environment=environment,
        release=release,
    )
    return True


def capture_exception_with_context(
    exception: Exception,
    correlation_id: Optional[str] = None,
    extra: Optional[dict] = None,
) -> Optional[str]:
    """
    Capture exception with additional context.

    Returns: Sentry event ID
    """
    with sentry_sdk.new_scope() as scope:
        if correlation_id:
            scope.set_tag("correlation_id", correlation_id)
        if extra:
            for key, value in _scrub_dict(extra).items():
                scope.set_extra(key, value)

        return sentry_sdk.capture_exception(exception)
