"""
Path normalization: ``/todos/`` routes the same as ``/todos``
"""

from starlette.types import ASGIApp, Receive, Scope, Send


class TrimTrailingSlashMiddleware:
    """Strip a single trailing slash before routing; ``/`` is left alone"""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] in ("http", "websocket"):
            path = scope["path"]
            if len(path) > 1 and path.endswith("/"):
                # In place, so outer middleware see the route the router matched
                scope["path"] = path[:-1]
                raw_path = scope.get("raw_path")
                if raw_path and len(raw_path) > 1 and raw_path.endswith(b"/"):
                    scope["raw_path"] = raw_path[:-1]

        await self.app(scope, receive, send)
