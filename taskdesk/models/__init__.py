"""SQLModel table models."""
from .task import Task, TaskStatus, TaskPriority
from .user import User

__all__ = ["Task", "TaskStatus", "TaskPriority", "User"]
