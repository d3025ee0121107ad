"""
PULIH Logging Configuration

Structured logging with:
- Correlation ID tracking for request tracing
- Sensitive data redaction
- JSON output outside development, console output in development

SECURITY: Journal free text (triggers, symptoms, strategies, notes)
must never be passed to the logger. Log identifiers and counts only.
"""

import logging
import sys
from typing import Any

import structlog

from pulih import __version__
from pulih.config.settings import Settings

SERVICE_NAME = "pulih-backend"

REDACTED = "[REDACTED]"

# Key fragments that mark credentials anywhere in a key name
CREDENTIAL_FRAGMENTS: tuple[str, ...] = (
    "password",
    "token",
    "secret",
    "authorization",
    "bearer",
    "credential",
)

# Free-text journal fields, matched by exact key
JOURNAL_TEXT_FIELDS: frozenset[str] = frozenset({
    "triggers",
    "symptoms",
    "strategies",
    "notes",
})


def is_sensitive_key(key: str) -> bool:
    """True when values under ``key`` must not reach the log output."""
    key = key.lower()
    return key in JOURNAL_TEXT_FIELDS or any(fragment in key for fragment in CREDENTIAL_FRAGMENTS)


def _scrub(key: str, value: Any) -> Any:
    if is_sensitive_key(key):
        return REDACTED
    if isinstance(value, dict):
        return {k: _scrub(str(k), v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_scrub(key, item) for item in value]
    return value


def redact_sensitive_data(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """
    structlog processor: replace credentials and journal text with
    ``[REDACTED]``, including inside nested dicts and lists.
    """
    return {key: _scrub(key, value) for key, value in event_dict.items()}


def _add_service_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("version", __version__)
    return event_dict


# Third-party loggers and the level they are held at
QUIET_LOGGERS: dict[str, int] = {
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "passlib": logging.ERROR,
}


def get_processors(is_development: bool) -> list[Any]:
    """
    Build the structlog processor chain.

    Redaction runs after context merging so values bound through
    contextvars are scrubbed too. Development renders to the console,
    every other environment emits one JSON object per line.
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        redact_sensitive_data,
        _add_service_context,
    ]

    if is_development:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    else:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]

    return processors


def configure_logging(settings: Settings) -> None:
    """Configure structlog and the stdlib root logger from settings."""
    level = logging.getLevelName(settings.log_level)

    structlog.configure(
        processors=get_processors(settings.env == "development"),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_correlation_id(correlation_id: str) -> None:
    """Attach ``correlation_id`` to every log line of the current request."""
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
