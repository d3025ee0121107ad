"""API middleware."""

from pulih.api.middleware.error_handler import ErrorHandlerMiddleware, register_exception_handlers
from pulih.api.middleware.rate_limiter import RateLimitConfig, RateLimitMiddleware

__all__ = [
    "ErrorHandlerMiddleware",
    "RateLimitConfig",
    "RateLimitMiddleware",
    "register_exception_handlers",
]
