"""Shared router dependencies."""
import uuid

from fastapi import Depends
from sqlalchemy.engine import Engine
from sqlmodel import Session

from taskdesk.db.config import get_engine, get_session
from taskdesk.errors import ValidationError
from taskdesk.services.dashboard_service import DashboardService
from taskdesk.services.task_query import TaskQueryService
from taskdesk.services.task_service import TaskService
from taskdesk.services.user_service import UserService


def parse_resource_id(raw: str) -> str:
    """Path ids must be UUIDs; anything else is a 400, not a 404."""
    try:
        return str(uuid.UUID(raw))
    except (TypeError, ValueError):
        raise ValidationError("Invalid id")


def get_task_service(session: Session = Depends(get_session)) -> TaskService:
    return TaskService(session)


def get_user_service(session: Session = Depends(get_session)) -> UserService:
    return UserService(session)


def get_task_query_service(engine: Engine = Depends(get_engine)) -> TaskQueryService:
    return TaskQueryService(engine)


def get_dashboard_service(engine: Engine = Depends(get_engine)) -> DashboardService:
    return DashboardService(engine)
