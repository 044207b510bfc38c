"""User model for SQLModel."""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column
from datetime import datetime
from typing import TYPE_CHECKING
import uuid

from taskdesk.db.types import UTCDateTime
from taskdesk.utils.timeutil import utcnow

if TYPE_CHECKING:
    from taskdesk.models.task import Task


class User(SQLModel, table=True):
    """User entity for authentication and task ownership."""

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True,
        index=True
    )
    # Stored and compared exactly as given (case-sensitive)
    email: str = Field(unique=True, index=True, max_length=255)
    display_name: str | None = Field(default=None, max_length=255)
    password_hash: str = Field(max_length=255)
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(UTCDateTime, nullable=False))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(UTCDateTime, nullable=False))

    tasks: list["Task"] = Relationship(
        back_populates="owner",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )
