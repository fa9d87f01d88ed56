"""Task Repository — SQLAlchemy implementation of the TaskRepository protocol.

Invariants:
    - Each write method is one atomic unit: it commits before returning
    - update/delete raise TaskNotFoundError when no row matches; nothing is written
    - update touches only the keys present in `fields`
    - find_many returns rows in primary-key order

Design Decisions:
    - Repository wraps a request-scoped AsyncSession; the session manager owns
      rollback and SQLAlchemy → DatabaseError mapping
    - Row lookup via session.get(): identity-map aware, one statement per call
"""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from task_api.core.domain_types import TaskId
from task_api.core.errors import TaskNotFoundError
from task_api.models.task import Task

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset({"title", "color", "completed"})


class SqlTaskRepository:
    """Task persistence over one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def find_many(self) -> list[Task]:
        result = await self._db.execute(select(Task).order_by(Task.id))
        return list(result.scalars().all())

    async def find_unique(self, task_id: TaskId) -> Task | None:
        return await self._db.get(Task, task_id)

    async def create(self, title: str, color: str) -> Task:
        task = Task(title=title, color=color, completed=False)
        self._db.add(task)
        await self._db.commit()
        await self._db.refresh(task)
        return task

    async def update(self, task_id: TaskId, fields: dict[str, Any]) -> Task:
        task = await self._require(task_id)
        for name, value in fields.items():
            if name not in _UPDATABLE_FIELDS:
                raise ValueError(f"Task field '{name}' is not updatable")
            setattr(task, name, value)
        await self._db.commit()
        await self._db.refresh(task)
        return task

    async def delete(self, task_id: TaskId) -> None:
        task = await self._require(task_id)
        await self._db.delete(task)
        await self._db.commit()

    async def _require(self, task_id: TaskId) -> Task:
        task = await self._db.get(Task, task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task
