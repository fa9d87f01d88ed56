"""Task Schemas — Pydantic models for task responses.

Invariants:
    - TaskResponse carries exactly id, title, color, completed
    - Built from ORM rows via from_attributes (no manual dict assembly)
"""

from pydantic import BaseModel, ConfigDict


class TaskResponse(BaseModel):
    """Task as returned by every /tasks endpoint."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    color: str
    completed: bool


class MessageResponse(BaseModel):
    """Plain acknowledgement, e.g. after a delete."""
    message: str
