"""
Application state: immutable context shared by every request

Built once in create_app, stored on ``app.state.app_state`` and handed to
handlers through FastAPI dependencies.
"""

import time
from dataclasses import dataclass, field

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from todo_service.config import ServerConfig
from todo_service.db.repository import TodoRepository


@dataclass(frozen=True)
class AppState:
    """Connection pool (via the session factory) + resolved server config"""

    session_factory: async_sessionmaker[AsyncSession]
    config: ServerConfig
    started_at: float = field(default_factory=time.monotonic)

    def uptime_secs(self) -> float:
        return time.monotonic() - self.started_at


def get_app_state(request: Request) -> AppState:
    """FastAPI dependency: the application context"""
    return request.app.state.app_state


def get_todo_repository(state: AppState = Depends(get_app_state)) -> TodoRepository:
    """FastAPI dependency: todo data access bound to the shared pool"""
    return TodoRepository(state.session_factory)
