"""
Todo model: a single item of the todo list

The id comes from the storage sequence and never changes after insert.
"""

from sqlalchemy import BigInteger, Boolean, Integer, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from todo_service.db.models.base import Base

# SQLite only autoincrements an INTEGER PRIMARY KEY (the rowid alias)
IdType = BigInteger().with_variant(Integer(), "sqlite")


class Todo(Base):
    """todos table"""

    __tablename__ = "todos"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    done: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    def __repr__(self) -> str:
        return f"Todo(id={self.id!r}, title={self.title!r}, done={self.done!r})"
