"""Task model for SQLModel."""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, String, ForeignKey, Text
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, List, Optional
import uuid

from taskdesk.db.types import UTCDateTime
from taskdesk.services.tag_codec import decode_tags
from taskdesk.utils.timeutil import utcnow

if TYPE_CHECKING:
    from taskdesk.models.user import User


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(SQLModel, table=True):
    """Task entity owned by exactly one user."""

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True,
    )
    owner_id: str = Field(
        sa_column=Column(String, ForeignKey("user.id", ondelete="CASCADE"), index=True, nullable=False)
    )
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, sa_column=Column(Text))
    status: str = Field(default=TaskStatus.TODO.value, max_length=20, index=True)
    priority: str = Field(default=TaskPriority.MEDIUM.value, max_length=20)
    due_date: Optional[datetime] = Field(default=None, sa_column=Column(UTCDateTime))
    # Non-null exactly when status == done
    completed_at: Optional[datetime] = Field(default=None, sa_column=Column(UTCDateTime))
    # Tag scalar, see taskdesk.services.tag_codec
    tags: Optional[str] = Field(default=None, sa_column=Column(Text))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(UTCDateTime, nullable=False))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(UTCDateTime, nullable=False))

    owner: "User" = Relationship(back_populates="tasks")

    @property
    def tag_list(self) -> List[str]:
        """Tags decoded from the stored scalar."""
        return decode_tags(self.tags)
