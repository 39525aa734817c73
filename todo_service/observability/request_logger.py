"""
Request tracing middleware: one structured log line when a request starts and
one when it finishes (method, path, status, latency, request id)
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

log = structlog.get_logger()


def _emit(event: str, **fields) -> None:
    try:
        log.info(event, **fields)
    except Exception:  # noqa: BLE001 - logging must never change the response
        pass


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """HTTP request tracing"""

    def __init__(self, app: ASGIApp, request_id_header: str = "x-request-id") -> None:
        super().__init__(app)
        self.request_id_header = request_id_header

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.monotonic()

        _emit(
            "request started",
            method=request.method,
            path=request.url.path,
            client_ip=request.client.host if request.client else "unknown",
        )

        try:
            response = await call_next(request)
        except Exception as e:
            log.error(
                "request failed",
                method=request.method,
                path=request.url.path,
                duration_ms=int((time.monotonic() - start) * 1000),
                error=str(e),
                exc_info=True,
            )
            raise

        duration_ms = int((time.monotonic() - start) * 1000)

        # The request id is assigned further in; read it back from the response
        _emit(
            "request finished",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=duration_ms,
            request_id=response.headers.get(self.request_id_header, ""),
        )

        return response
