"""
Error Handler Middleware

Provides consistent error handling and response formatting.
Logs errors with correlation IDs for debugging and records
request metrics.
"""

import time
import traceback
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from pulih.config.logging_config import bind_correlation_id, clear_context, get_logger
from pulih.domain.exceptions import NotAuthenticatedError, PulihError
from pulih.infrastructure.metrics import track_http_request
from pulih.infrastructure.monitoring import capture_exception_with_context

logger = get_logger(__name__)


def _endpoint_label(request: Request) -> str:
    """Route template (e.g. /api/v1/journal/entries/{entry_id}) to keep label cardinality low."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Provides:
    - Correlation ID tracking for all requests
    - Sanitized 500 responses for unhandled errors
    - Request count and latency metrics
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request with error handling."""
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid4())
        bind_correlation_id(correlation_id)
        started = time.perf_counter()

        try:
            response = await call_next(request)
            response.headers["X-Correlation-ID"] = correlation_id
            track_http_request(
                request.method,
                _endpoint_label(request),
                response.status_code,
                time.perf_counter() - started,
            )
            return response

        except Exception as e:
            logger.error(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
                error_type=type(e).__name__,
                error_message=str(e),
                traceback=traceback.format_exc(),
            )
            capture_exception_with_context(
                e,
                correlation_id=correlation_id,
                extra={"path": request.url.path, "method": request.method},
            )
            track_http_request(
                request.method,
                _endpoint_label(request),
                500,
                time.perf_counter() - started,
            )

            return JSONResponse(
                status_code=500,
                content={
                    "error": "Internal server error",
                    "correlation_id": correlation_id,
                    "message": "An unexpected error occurred. Please try again.",
                },
                headers={"X-Correlation-ID": correlation_id},
            )

        finally:
            clear_context()


async def pulih_error_handler(request: Request, exc: PulihError) -> JSONResponse:
    """Translate a domain error into its HTTP status."""
    headers = None
    if isinstance(exc, NotAuthenticatedError):
        headers = {"WWW-Authenticate": "Bearer"}

    logger.info(
        "Request rejected",
        path=request.url.path,
        error_type=type(exc).__name__,
        status_code=exc.status_code,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the domain error handlers on an application."""
    app.add_exception_handler(PulihError, pulih_error_handler)
