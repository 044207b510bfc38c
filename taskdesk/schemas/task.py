"""Task schemas."""
from pydantic import Field, field_validator
from datetime import datetime
from typing import Annotated, Optional, List

from taskdesk.models.task import Task, TaskStatus, TaskPriority
from taskdesk.schemas.common import CamelModel
from taskdesk.utils.timeutil import to_utc

TagName = Annotated[str, Field(min_length=1)]


class TaskCreate(CamelModel):
    """Schema for creating a task."""
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: Optional[TaskPriority] = None
    tags: Optional[List[TagName]] = None

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, value):
        return to_utc(value)


class TaskUpdate(CamelModel):
    """Schema for updating a task; only fields present in the body are applied."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    tags: Optional[List[TagName]] = None

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, value):
        return to_utc(value)

    @field_validator("title", "status", "priority")
    @classmethod
    def reject_null(cls, value):
        # These columns are not nullable; omit them instead of sending null
        if value is None:
            raise ValueError("must not be null")
        return value


class TaskStatusUpdate(CamelModel):
    status: TaskStatus


class TaskResponse(CamelModel):
    """Task as returned to clients, with tags decoded."""
    id: str
    owner_id: str
    title: str
    description: Optional[str]
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[datetime]
    completed_at: Optional[datetime]
    tags: List[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            owner_id=task.owner_id,
            title=task.title,
            description=task.description,
            status=task.status,
            priority=task.priority,
            due_date=task.due_date,
            completed_at=task.completed_at,
            tags=task.tag_list,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class TaskPage(CamelModel):
    """One window of a task listing plus the total matching count."""
    items: List[TaskResponse]
    total: int
    page: int
    limit: int
