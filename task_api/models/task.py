"""Task ORM — the sole persisted entity, a to-do item.

Invariants:
    - id is an integer primary key assigned by the store, never reused
    - title, color, completed are non-nullable once created
    - Column lengths match the validation limits in core/domain_types.py

Design Decisions:
    - sqlite_autoincrement: SQLite otherwise reuses the highest id after a
      delete; PostgreSQL sequences never do
"""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from task_api.core.domain_types import TITLE_MAX_LENGTH, COLOR_MAX_LENGTH
from task_api.db.base import Base


class Task(Base):
    """To-do item with title, color tag and completion flag."""
    __tablename__ = "tasks"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH), nullable=False,
    )
    color: Mapped[str] = mapped_column(
        String(COLOR_MAX_LENGTH), nullable=False,
    )
    completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )

    def __repr__(self) -> str:
        return f"<Task id={self.id} title={self.title!r} completed={self.completed}>"
