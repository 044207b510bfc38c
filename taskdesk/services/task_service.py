"""Task repository: owner-scoped persistence of tasks."""
from sqlmodel import Session, select
from sqlalchemy import func
from typing import Any, Dict, List, Optional
from datetime import datetime
import logging

from taskdesk.errors import NotFoundError
from taskdesk.models.task import Task, TaskStatus, TaskPriority
from taskdesk.services.ownership import OwnershipPolicy, enforce_ownership
from taskdesk.services.tag_codec import encode_tags
from taskdesk.utils.timeutil import to_utc, utcnow

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "status", "priority", "due_date", "tags")


def apply_status(task: Task, status: str, now: datetime) -> None:
    """Set the status and keep completed_at non-null exactly when done."""
    status = TaskStatus(status).value
    if status == TaskStatus.DONE.value:
        # Re-marking a done task keeps its original completion time
        if task.status != TaskStatus.DONE.value or task.completed_at is None:
            task.completed_at = now
    else:
        task.completed_at = None
    task.status = status


class TaskService:
    """Service class for task CRUD operations scoped to an owner."""

    def __init__(self, session: Session):
        self.session = session

    def create(
        self,
        owner_id: str,
        title: str,
        description: Optional[str] = None,
        priority: Optional[str] = None,
        due_date: Optional[datetime] = None,
        tags: Optional[List[str]] = None,
    ) -> Task:
        """Create a new task; status starts at todo, priority defaults to medium."""
        now = utcnow()
        task = Task(
            owner_id=owner_id,
            title=title,
            description=description,
            status=TaskStatus.TODO.value,
            priority=TaskPriority(priority or TaskPriority.MEDIUM).value,
            due_date=to_utc(due_date),
            completed_at=None,
            tags=encode_tags(tags),
            created_at=now,
            updated_at=now,
        )

        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        logger.info("Created task %s for owner %s", task.id, owner_id)
        return task

    def find_by_id(self, owner_id: str, task_id: str) -> Optional[Task]:
        """Get a task by id; another owner's task is reported as missing."""
        statement = (
            select(Task)
            .where(Task.id == task_id)
            .where(Task.owner_id == owner_id)
        )
        return self.session.exec(statement).first()

    def get_owned(
        self,
        owner_id: str,
        task_id: str,
        policy: OwnershipPolicy = OwnershipPolicy.MASK_AS_NOT_FOUND,
    ) -> Task:
        """Load a task by id and apply the ownership policy to it."""
        task = self.session.get(Task, task_id)
        if task is None:
            raise NotFoundError("Task not found")
        enforce_ownership(task.owner_id, owner_id, policy, resource="Task")
        return task

    def update(self, owner_id: str, task_id: str, changes: Dict[str, Any]) -> Task:
        """
        Merge the supplied fields into a task.

        Only keys present in ``changes`` are touched; a key mapped to None clears
        nullable fields (description, due_date, tags).

        Raises:
            NotFoundError: if the task does not exist for this owner
        """
        task = self.get_owned(owner_id, task_id)
        now = utcnow()

        for field, value in changes.items():
            if field not in UPDATABLE_FIELDS:
                continue
            if field == "status":
                apply_status(task, value, now)
            elif field == "priority":
                task.priority = TaskPriority(value).value
            elif field == "tags":
                task.tags = encode_tags(value)
            elif field == "due_date":
                task.due_date = to_utc(value)
            else:
                setattr(task, field, value)

        task.updated_at = now
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        return task

    def set_status(self, owner_id: str, task_id: str, status: str) -> Task:
        """Status transition; completed_at follows the new status."""
        return self.update(owner_id, task_id, {"status": status})

    def delete(self, owner_id: str, task_id: str) -> bool:
        """Delete a task, ensuring owner scope."""
        task = self.find_by_id(owner_id, task_id)
        if not task:
            return False

        self.session.delete(task)
        self.session.commit()
        logger.info("Deleted task %s for owner %s", task_id, owner_id)
        return True

    def count_by_owner(self, owner_id: str, *criteria) -> int:
        """Count the owner's tasks matching extra SQL criteria."""
        statement = select(func.count()).select_from(Task).where(Task.owner_id == owner_id)
        for criterion in criteria:
            statement = statement.where(criterion)
        return self.session.exec(statement).one()
