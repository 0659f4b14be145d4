"""
FastAPI middleware for observability.

CorrelationMiddleware binds a per-request correlation ID (taken from the
X-Correlation-ID header or generated) and echoes it on the response.
RequestLoggingMiddleware writes one record per request. For SSE responses
the recorded duration covers time to headers, not the whole stream.

Dependencies: fastapi, starlette, pdfchat.observability.correlation
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from pdfchat.observability.correlation import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

# Polled by load balancers and the UI; logged at DEBUG only
QUIET_PATHS = frozenset({"/health"})


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and latency of every request."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        path = request.url.path
        base_extra = {
            "method": request.method,
            "path": path,
            "client_host": request.client.host if request.client else None,
        }

        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{request.method} {path} failed",
                extra={**base_extra, "duration_ms": _elapsed_ms(started), "error_type": type(e).__name__},
            )
            raise

        level = logging.DEBUG if path in QUIET_PATHS else logging.INFO
        logger.log(
            level,
            f"{request.method} {path} -> {response.status_code}",
            extra={
                **base_extra,
                "status_code": response.status_code,
                "duration_ms": _elapsed_ms(started),
                "streaming": response.headers.get("content-type", "").startswith("text/event-stream"),
            },
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind a correlation ID for the request and echo it back."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
