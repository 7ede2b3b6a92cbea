"""Request/response logging middleware with timing and HTTP metrics."""

import time
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from installment_billing.core.config import settings
from installment_billing.core.metrics import record_http_request

from .request_context import get_request_id

logger = structlog.get_logger(__name__)

# Not worth a log line or a metric sample each
QUIET_PATHS = frozenset({"/health", "/metrics"})


def _endpoint_label(request: Request) -> str:
    """Route template (``/v1/plans/{plan_id}``) so IDs don't explode label cardinality."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs request start, completion, and duration; records request metrics."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        method = request.method
        path = request.url.path
        quiet = path in QUIET_PATHS

        log = logger.bind(
            request_id=get_request_id(),
            method=method,
            path=path,
        )

        if not quiet:
            query = str(request.query_params) if request.query_params else None
            log.info("request_started", query=query)

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            log.error(
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round(duration_ms, 2),
            )
            raise

        duration = time.perf_counter() - start_time
        if not quiet:
            log.info(
                "request_completed",
                status_code=response.status_code,
                duration_ms=round(duration * 1000, 2),
            )
            if settings.metrics_enabled:
                record_http_request(
                    method, _endpoint_label(request), response.status_code, duration
                )

        return response
