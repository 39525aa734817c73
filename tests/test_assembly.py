"""Tests for middleware assembly from ServerConfig."""

from __future__ import annotations

from starlette.middleware.cors import CORSMiddleware

from todo_service.config import CorsPolicy, ServerConfig
from todo_service.middleware import (
    RequestIdMiddleware,
    TimeoutMiddleware,
    TrimTrailingSlashMiddleware,
    build_middleware,
)
from todo_service.middleware.cors import WildcardCORSMiddleware
from todo_service.observability.metrics_middleware import MetricsMiddleware
from todo_service.observability.request_logger import RequestLoggerMiddleware


def classes(config: ServerConfig) -> list[type]:
    return [m.cls for m in build_middleware(config)]


def test_order_outermost_first():
    assert classes(ServerConfig()) == [
        MetricsMiddleware,
        RequestLoggerMiddleware,
        RequestIdMiddleware,
        TimeoutMiddleware,
        TrimTrailingSlashMiddleware,
        WildcardCORSMiddleware,
    ]


def test_disabled_cors_has_no_layer():
    layers = classes(ServerConfig(cors=CorsPolicy.disabled()))
    assert CORSMiddleware not in layers
    assert WildcardCORSMiddleware not in layers


def test_allow_list_is_passed_through():
    config = ServerConfig(cors=CorsPolicy.allow(["https://a.example"]))
    cors = build_middleware(config)[-1]
    assert cors.cls is CORSMiddleware
    assert cors.kwargs["allow_origins"] == ["https://a.example"]
    assert cors.kwargs["allow_credentials"] is True
    assert cors.kwargs["allow_headers"] == ["Content-Type", "Authorization"]


def test_request_id_header_is_configured():
    config = ServerConfig(request_id_header="x-correlation-id")
    request_id = next(m for m in build_middleware(config) if m.cls is RequestIdMiddleware)
    assert request_id.kwargs == {"header_name": "x-correlation-id"}
