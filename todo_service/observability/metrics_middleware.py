"""
Request metrics middleware

Records method, route, status code and latency for every HTTP request. The
endpoint label is the matched route template (``unmatched`` otherwise), so
arbitrary request paths never mint new label series.
"""

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from todo_service.observability.metrics import REQUEST_DURATION, REQUEST_TOTAL

UNMATCHED_ENDPOINT = "unmatched"


class MetricsMiddleware(BaseHTTPMiddleware):
    """HTTP request metrics"""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        # Skip the scrape endpoint itself and health probes
        if request.url.path.rstrip("/") in ("/metrics", "/health"):
            return await call_next(request)

        start = time.monotonic()
        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000

        # The router records the matched route on the shared scope
        route = request.scope.get("route")
        endpoint = getattr(route, "path", None) or UNMATCHED_ENDPOINT
        method = request.method
        status = str(response.status_code)

        REQUEST_TOTAL.labels(method=method, endpoint=endpoint, status_code=status).inc()
        REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(duration_ms)

        return response
