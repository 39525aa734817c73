"""
Middleware assembly: ServerConfig -> ordered middleware list

Order, outermost first:
metrics -> tracing -> request id -> timeout -> path normalization -> CORS
"""

from starlette.middleware import Middleware

from todo_service.config import ServerConfig
from todo_service.middleware.cors import cors_middleware
from todo_service.middleware.normalize_path import TrimTrailingSlashMiddleware
from todo_service.middleware.request_id import RequestIdMiddleware
from todo_service.middleware.timeout import TimeoutMiddleware
from todo_service.observability.metrics_middleware import MetricsMiddleware
from todo_service.observability.request_logger import RequestLoggerMiddleware


def build_middleware(config: ServerConfig) -> list[Middleware]:
    """Middleware list for FastAPI(middleware=...), outermost first"""
    middleware = [
        Middleware(MetricsMiddleware),
        Middleware(RequestLoggerMiddleware, request_id_header=config.request_id_header),
        Middleware(RequestIdMiddleware, header_name=config.request_id_header),
        Middleware(TimeoutMiddleware, timeout=config.timeout),
        Middleware(TrimTrailingSlashMiddleware),
    ]

    cors = cors_middleware(config.cors)
    if cors is not None:
        middleware.append(cors)

    return middleware


__all__ = [
    "build_middleware",
    "cors_middleware",
    "RequestIdMiddleware",
    "TimeoutMiddleware",
    "TrimTrailingSlashMiddleware",
]
