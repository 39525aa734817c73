"""
Request-ID propagation: keep the caller's id or mint a new one, expose it to
handlers and logs, and echo it on the response under the same header
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from todo_service.observability.context import new_request_id


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Set and propagate the request id header"""

    def __init__(self, app: ASGIApp, header_name: str = "x-request-id") -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        # A header that is present is kept as-is, even when empty
        if self.header_name in request.headers:
            request_id = request.headers[self.header_name]
        else:
            request_id = new_request_id()

        request.state.request_id = request_id

        # Every log line emitted while handling this request carries the id
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        response = await call_next(request)
        response.headers[self.header_name] = request_id
        return response
