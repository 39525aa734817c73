"""
CORS layer selection from CorsPolicy
"""

from starlette.datastructures import MutableHeaders
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.types import Message, Receive, Scope, Send

from todo_service.config import CorsPolicy

DEFAULT_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]
DEFAULT_HEADERS = ["Content-Type", "Authorization"]


class WildcardCORSMiddleware(CORSMiddleware):
    """
    Permissive CORS: any origin is allowed and answered with a literal ``*``,
    credentials included.

    Starlette reflects the request origin when credentials are allowed; this
    keeps the wildcard on simple and preflight responses alike.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await super().__call__(scope, receive, send)
            return

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                if "access-control-allow-origin" in headers:
                    headers["Access-Control-Allow-Origin"] = "*"
            await send(message)

        await super().__call__(scope, receive, send_wrapper)


def cors_middleware(policy: CorsPolicy) -> Middleware | None:
    """CORS middleware for the policy, or None when CORS is disabled"""
    if policy.mode == "disabled":
        return None

    if policy.mode == "permissive":
        # Wildcard origin together with credentials is kept as configured
        cls, allow_origins = WildcardCORSMiddleware, ["*"]
    elif policy.mode == "allow":
        cls, allow_origins = CORSMiddleware, list(policy.origins)
    else:
        raise ValueError(f"unknown CORS policy mode: {policy.mode!r}")

    return Middleware(
        cls,
        allow_origins=allow_origins,
        allow_methods=DEFAULT_METHODS,
        allow_headers=DEFAULT_HEADERS,
        allow_credentials=True,
    )
