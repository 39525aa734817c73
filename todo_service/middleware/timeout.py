"""
Global handler timeout (pure ASGI)

The inner application runs as a task bounded by the configured duration. On
expiry that task is cancelled, so an awaited database statement is abandoned
and its session returns the connection to the pool, and a 504 with no body is
sent instead.
"""

import asyncio
from datetime import timedelta

import structlog
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from todo_service.observability.metrics import ERROR_TOTAL

log = structlog.get_logger()


class TimeoutMiddleware:
    def __init__(self, app: ASGIApp, timeout: timedelta) -> None:
        self.app = app
        self.timeout = timeout.total_seconds()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(self.app(scope, receive, send_wrapper), timeout=self.timeout)
            return
        except asyncio.TimeoutError:
            ERROR_TOTAL.labels(error_type="timeout").inc()
            log.warning(
                "request timed out",
                method=scope.get("method"),
                path=scope.get("path"),
                timeout_secs=self.timeout,
                response_started=response_started,
            )

        # Status line already sent: the truncated response is all we can do
        if response_started:
            return

        response = Response(status_code=504)
        await response(scope, receive, send)
