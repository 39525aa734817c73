"""
Todo data access: insert-and-return + select-all

Each call opens its own session from the shared factory, so a cancelled
request releases its connection back to the pool when the session closes.
Failures (driver errors and refused or dropped connections alike) are wrapped
in StorageError and never retried here.
"""

import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from todo_service.db.models import Todo
from todo_service.errors import StorageError

log = structlog.get_logger()

# Drivers such as asyncpg raise plain OSError subclasses while connecting
STORAGE_ERRORS = (SQLAlchemyError, OSError)


class TodoRepository:
    """CRUD over the todos table (create and list only)"""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def insert(self, title: str, description: str, done: bool = False) -> Todo:
        """Insert a row, letting the database assign the id, and return it"""
        try:
            async with self._session_factory() as db:
                todo = Todo(title=title, description=description, done=done)
                db.add(todo)
                await db.commit()
        except STORAGE_ERRORS as e:
            log.error("todo insert failed", error=str(e))
            raise StorageError(f"Failed to create Todo: {e}") from e
        return todo

    async def list_all(self) -> list[Todo]:
        """Every row, ordered by id"""
        try:
            async with self._session_factory() as db:
                result = await db.execute(select(Todo).order_by(Todo.id))
                return list(result.scalars().all())
        except STORAGE_ERRORS as e:
            log.error("todo listing failed", error=str(e))
            raise StorageError(f"Failed to fetch all To-Dos: {e}") from e
