"""
Pytest fixtures for the todo service. Each test gets a temporary SQLite database
(sqlite+aiosqlite); the app lifespan runs the Alembic migrations on it.
"""

from __future__ import annotations

import pytest

from todo_service.config import Settings

PIPELINE_ENV_VARS = (
    "DATABASE_URL",
    "REQUEST_ID_HEADER",
    "TIMEOUT_SECS",
    "CORS_ALLOWED_ORIGINS",
    "CORS_DISABLED",
    "ADMIN_TOKEN",
    "RUN_MIGRATIONS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the caller's environment from leaking into Settings"""
    for name in PIPELINE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'todos.db'}"


@pytest.fixture
def make_settings(database_url):
    """Settings factory: temp DB by default, keyword overrides on top"""

    def _make(**overrides) -> Settings:
        values = {"DATABASE_URL": database_url, "ENV": "test"}
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def make_client(make_settings):
    """
    TestClient factory. Clients are entered as context managers so startup
    (DB check + migrations) and shutdown run; all are closed after the test.
    """
    from fastapi.testclient import TestClient

    from todo_service.server import create_app

    clients = []

    def _make(**overrides) -> TestClient:
        client = TestClient(create_app(make_settings(**overrides)))
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    """Client with default pipeline settings"""
    return make_client()
