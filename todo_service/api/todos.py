"""
Todo routes: create and list
"""

import structlog
from fastapi import APIRouter, Depends, status

from todo_service.api.schemas import CreateTodoRequest, TodoOut
from todo_service.db.repository import TodoRepository
from todo_service.observability.metrics import TODO_CREATED_TOTAL
from todo_service.state import get_todo_repository

router = APIRouter(prefix="/todos", tags=["todos"])
log = structlog.get_logger()


@router.post("", response_model=TodoOut, status_code=status.HTTP_201_CREATED)
async def create_todo(
    body: CreateTodoRequest,
    repo: TodoRepository = Depends(get_todo_repository),
):
    """Create a todo; the database assigns the id"""
    todo = await repo.insert(body.title, body.description, body.done)
    TODO_CREATED_TOTAL.inc()
    log.info("todo created", todo_id=todo.id)
    return todo


@router.get("", response_model=list[TodoOut])
async def list_todos(repo: TodoRepository = Depends(get_todo_repository)):
    """All todos, ordered by id"""
    return await repo.list_all()
