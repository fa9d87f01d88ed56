"""Task Routes — list, get, create, update and delete over the Task resource.

Invariants:
    - Every route with input declares its field rules; handlers only see validated values
    - Missing ids surface as TaskNotFoundError → 404 {"error": "Task not found"}
    - Store failures surface as DatabaseError → 503, uniformly across all five routes
    - create always persists completed=False

Design Decisions:
    - Thin routes: persistence behind TaskRepository, error shaping in error_handlers
    - Repository built per request from the request-scoped session
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from task_api.api.request_validation import validate_request
from task_api.core.domain_types import TaskId
from task_api.core.errors import TaskNotFoundError
from task_api.core.repository_protocols import TaskRepository
from task_api.core.task_rules import (
    GET_TASK_RULES, CREATE_TASK_RULES, UPDATE_TASK_RULES, DELETE_TASK_RULES,
)
from task_api.infrastructure.database import get_db
from task_api.infrastructure.task_repository import SqlTaskRepository
from task_api.schemas.task import TaskResponse, MessageResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/tasks", tags=["tasks"])


def get_task_repository(db: AsyncSession = Depends(get_db)) -> TaskRepository:
    return SqlTaskRepository(db)


@router.get("", response_model=list[TaskResponse])
async def list_tasks(repo: TaskRepository = Depends(get_task_repository)):
    """All tasks, in id order."""
    tasks = await repo.find_many()
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get("/{id}", response_model=TaskResponse)
async def get_task(
    values: dict[str, Any] = Depends(validate_request(GET_TASK_RULES)),
    repo: TaskRepository = Depends(get_task_repository),
):
    task_id = TaskId(values["id"])
    task = await repo.find_unique(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return TaskResponse.model_validate(task)


@router.post(
    "", response_model=TaskResponse, status_code=status.HTTP_201_CREATED,
)
async def create_task(
    values: dict[str, Any] = Depends(validate_request(CREATE_TASK_RULES)),
    repo: TaskRepository = Depends(get_task_repository),
):
    """Create a task; completion always starts false."""
    task = await repo.create(values["title"], values["color"])
    logger.info("Task created", extra={"task_id": task.id})
    return TaskResponse.model_validate(task)


@router.put("/{id}", response_model=TaskResponse)
async def update_task(
    values: dict[str, Any] = Depends(validate_request(UPDATE_TASK_RULES)),
    repo: TaskRepository = Depends(get_task_repository),
):
    """Partial update — only supplied fields change."""
    task_id = TaskId(values.pop("id"))
    task = await repo.update(task_id, values)
    logger.info(
        f"Task updated ({', '.join(sorted(values)) or 'no fields'})",
        extra={"task_id": task_id},
    )
    return TaskResponse.model_validate(task)


@router.delete("/{id}", response_model=MessageResponse)
async def delete_task(
    values: dict[str, Any] = Depends(validate_request(DELETE_TASK_RULES)),
    repo: TaskRepository = Depends(get_task_repository),
):
    task_id = TaskId(values["id"])
    await repo.delete(task_id)
    logger.info("Task deleted", extra={"task_id": task_id})
    return MessageResponse(message="Task deleted")
