"""
Server composition: create_app() wires state, middleware and routes

Pipeline, outermost first:
[bearer gate] -> metrics -> tracing -> request id -> timeout
-> path normalization -> CORS -> routes
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.middleware import Middleware

from todo_service.api.health import router as health_router
from todo_service.api.metrics import router as metrics_router
from todo_service.api.todos import router as todos_router
from todo_service.config import Settings, get_settings, resolve_server_config
from todo_service.db.engine import create_engine, create_session_factory
from todo_service.db.migrate import run_migrations
from todo_service.errors import StorageError
from todo_service.middleware import build_middleware
from todo_service.observability.metrics import ERROR_TOTAL
from todo_service.security.auth import BearerTokenMiddleware
from todo_service.state import AppState

log = structlog.get_logger()


async def storage_error_handler(request: Request, exc: StorageError) -> PlainTextResponse:
    """StorageError -> 500 with the error text; retrying is up to the client"""
    ERROR_TOTAL.labels(error_type="storage").inc()
    log.error("storage error", method=request.method, path=request.url.path, error=str(exc))
    return PlainTextResponse(str(exc), status_code=500)


def create_app(settings: Settings | None = None, engine: AsyncEngine | None = None) -> FastAPI:
    """
    Build the complete request pipeline once.

    Args:
        settings: explicit settings; defaults to the cached environment settings
        engine: pre-built engine (tests); defaults to one built from settings

    Raises:
        ConfigError: malformed configuration, raised before anything is served
    """
    settings = settings or get_settings()
    config = resolve_server_config(settings)

    engine = engine or create_engine(settings)
    state = AppState(session_factory=create_session_factory(engine), config=config)

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        """Startup: fail fast when the DB is unreachable, then migrate. Shutdown: release the pool"""
        log.info(
            "application starting",
            env=settings.ENV,
            app=settings.APP_NAME,
            request_id_header=config.request_id_header,
            timeout_secs=config.timeout.total_seconds(),
            cors=config.cors.mode,
            auth=bool(settings.ADMIN_TOKEN),
        )

        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        log.info("database connection ok")

        if settings.RUN_MIGRATIONS:
            await run_migrations(engine)

        yield

        await engine.dispose()
        log.info("application stopped, resources released", uptime_secs=round(state.uptime_secs(), 1))

    # ── Middleware (outermost first) ──
    middleware: list[Middleware] = []
    if settings.ADMIN_TOKEN:
        # Gates the whole pipeline, /health included
        middleware.append(Middleware(BearerTokenMiddleware, token=settings.ADMIN_TOKEN))
    middleware.extend(build_middleware(config))

    application = FastAPI(
        title=settings.APP_NAME,
        version="0.1.0",
        lifespan=lifespan,
        middleware=middleware,
        redirect_slashes=False,
    )
    application.state.app_state = state

    application.add_exception_handler(StorageError, storage_error_handler)

    # ── Routes ──
    application.include_router(health_router)
    application.include_router(todos_router)
    application.include_router(metrics_router)

    return application
