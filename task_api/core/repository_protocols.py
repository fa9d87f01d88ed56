"""Boundary Protocols — contracts between route handlers and persistence.

Invariants:
    - Routes depend on TaskRepository, never on SQLAlchemy directly
    - update/delete raise TaskNotFoundError when the id is absent; find_unique returns None
    - Store failures surface as DatabaseError (mapped by the session manager)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO
"""

from typing import Any, Protocol

from task_api.core.domain_types import TaskId


class TaskLike(Protocol):
    """Structural contract for Task rows handed back to routes."""
    id: int
    title: str
    color: str
    completed: bool


class TaskRepository(Protocol):
    """Contract for task persistence — implemented by infrastructure."""
    async def find_many(self) -> list[TaskLike]: ...
    async def find_unique(self, task_id: TaskId) -> TaskLike | None: ...
    async def create(self, title: str, color: str) -> TaskLike: ...
    async def update(self, task_id: TaskId, fields: dict[str, Any]) -> TaskLike: ...
    async def delete(self, task_id: TaskId) -> None: ...
