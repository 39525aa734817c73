"""
Todo request/response models
"""

from pydantic import BaseModel, ConfigDict


class CreateTodoRequest(BaseModel):
    """POST /todos body"""

    title: str
    description: str
    done: bool = False


class TodoOut(BaseModel):
    """A persisted todo as returned by the API"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    done: bool
