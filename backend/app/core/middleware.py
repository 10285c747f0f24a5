"""Per-request observability for the dashboard.

Every request gets a request id (the caller's X-Request-ID when present)
bound into structlog contextvars for the lifetime of the request. Counts
and latencies are recorded against the route pattern, and the id is echoed
back on the response.
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.core.metrics import http_request_duration_seconds, http_requests_total

logger = structlog.stdlib.get_logger("weaviate_dashboard.http")


def _route_path(request: Request) -> str:
    # Route pattern keeps the path label low-cardinality
    route = request.scope.get("route")
    return route.path if route else request.url.path


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """Binds request_id, records HTTP metrics, and logs one line per request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start = time.perf_counter()
        # Reported when the handler raises; the error middleware answers 500
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            duration = time.perf_counter() - start
            path = _route_path(request)
            method = request.method

            http_requests_total.labels(method=method, path=path, status=status_code).inc()
            http_request_duration_seconds.labels(method=method, path=path).observe(duration)

            log = logger.info if status_code < 500 else logger.warning
            log(
                "request_completed",
                method=method,
                path=path,
                status=status_code,
                duration_ms=round(duration * 1000, 2),
            )
            structlog.contextvars.clear_contextvars()
