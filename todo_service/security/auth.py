"""
Static bearer-token gate: when ADMIN_TOKEN is set, every request must carry
``Authorization: Bearer <ADMIN_TOKEN>``
"""

import secrets

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from todo_service.observability.metrics import ERROR_TOTAL

log = structlog.get_logger()


class BearerTokenMiddleware(BaseHTTPMiddleware):
    """Reject requests without the exact admin bearer token before any inner layer runs"""

    def __init__(self, app: ASGIApp, token: str) -> None:
        super().__init__(app)
        if not token:
            raise ValueError("BearerTokenMiddleware requires a non-empty token")
        self._expected = f"Bearer {token}".encode()

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        provided = request.headers.get("authorization", "")
        if not secrets.compare_digest(provided.encode(), self._expected):
            ERROR_TOTAL.labels(error_type="unauthorized").inc()
            log.warning(
                "unauthorized request",
                method=request.method,
                path=request.url.path,
                has_authorization=bool(provided),
            )
            return JSONResponse(
                {"detail": "Unauthorized"},
                status_code=401,
                headers={"WWW-Authenticate": "Bearer"},
            )

        return await call_next(request)
