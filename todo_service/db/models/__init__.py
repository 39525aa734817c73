"""
Model exports: Alembic needs every model imported to see the full metadata
"""

from todo_service.db.models.base import Base
from todo_service.db.models.todo import Todo

__all__ = ["Base", "Todo"]
