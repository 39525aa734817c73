"""Tests for TodoRepository and the startup migration against a temporary SQLite DB."""

from __future__ import annotations

import asyncio

import pytest
from sqlalchemy import inspect

from todo_service.db.engine import create_engine, create_session_factory
from todo_service.db.migrate import run_migrations
from todo_service.db.repository import TodoRepository
from todo_service.errors import StorageError


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def engine(make_settings):
    return create_engine(make_settings())


async def _migrated_repository(engine) -> TodoRepository:
    await run_migrations(engine)
    return TodoRepository(create_session_factory(engine))


def test_migration_creates_todos_table(engine):
    async def scenario():
        await run_migrations(engine)
        # Running twice is a no-op
        await run_migrations(engine)
        async with engine.connect() as conn:
            columns = await conn.run_sync(
                lambda sync_conn: {c["name"] for c in inspect(sync_conn).get_columns("todos")}
            )
        await engine.dispose()
        return columns

    columns = run(scenario())
    assert columns == {"id", "title", "description", "done"}


def test_insert_assigns_increasing_ids(engine):
    async def scenario():
        repo = await _migrated_repository(engine)
        first = await repo.insert("a", "first")
        second = await repo.insert("b", "second", done=True)
        listed = await repo.list_all()
        await engine.dispose()
        return first, second, listed

    first, second, listed = run(scenario())
    assert second.id > first.id
    assert first.done is False
    assert second.done is True
    assert [(t.id, t.title, t.description, t.done) for t in listed] == [
        (first.id, "a", "first", False),
        (second.id, "b", "second", True),
    ]


def test_constraint_violation_raises_storage_error(engine):
    async def scenario():
        repo = await _migrated_repository(engine)
        with pytest.raises(StorageError, match="Failed to create Todo"):
            await repo.insert(None, "title is NOT NULL")
        rows = await repo.list_all()
        await engine.dispose()
        return rows

    assert run(scenario()) == []


def test_missing_table_raises_storage_error(engine):
    async def scenario():
        repo = TodoRepository(create_session_factory(engine))
        with pytest.raises(StorageError, match="Failed to fetch all To-Dos"):
            await repo.list_all()
        await engine.dispose()

    run(scenario())
