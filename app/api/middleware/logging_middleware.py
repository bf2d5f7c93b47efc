"""
Request logging middleware for FastAPI application.

Every request gets a correlation id (taken from X-Correlation-ID when the
caller sends one) that is echoed back and attached to the log record.
"""

import time
import uuid
from collections.abc import Awaitable, Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.core.shared import get_logger

CORRELATION_HEADER = "X-Correlation-ID"

logger = get_logger(__name__, {"component": "http"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration for each request."""

    # High-frequency, low-value paths
    EXCLUDE_PATHS: tuple[str, ...] = ("/health",)

    def _should_log(self, path: str) -> bool:
        return not any(path.startswith(exclude) for exclude in self.EXCLUDE_PATHS)

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or uuid.uuid4().hex[:8]
        request.state.correlation_id = correlation_id

        if not self._should_log(request.url.path):
            response = await call_next(request)
            response.headers[CORRELATION_HEADER] = correlation_id
            return response

        request_logger = logger.with_context(
            correlation_id=correlation_id,
            method=request.method,
            path=request.url.path,
        )
        start_time = time.perf_counter()
        request_logger.debug(f"--> {request.method} {request.url.path}")

        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start_time) * 1000
            request_logger.error(
                f"<-- {request.method} {request.url.path} ERROR in {duration_ms:.2f}ms",
                duration_ms=round(duration_ms, 2),
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        log = request_logger.warning if response.status_code >= 400 else request_logger.info
        log(
            f"<-- {request.method} {request.url.path} {response.status_code} in {duration_ms:.2f}ms",
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )

        response.headers[CORRELATION_HEADER] = correlation_id
        return response
