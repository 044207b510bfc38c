"""
Dashboard aggregation.

Five owner-scoped sub-queries (three status counts, overdue count, upcoming
window) are issued concurrently. Each reflects its own snapshot; the numbers
are advisory and may disagree slightly under concurrent writes.
"""
import asyncio
from datetime import datetime, timedelta
from typing import List, Optional
import logging

from pydantic import BaseModel
from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from taskdesk.errors import ValidationError
from taskdesk.models.task import Task, TaskStatus
from taskdesk.schemas.task import TaskResponse
from taskdesk.utils.timeutil import to_utc, utcnow

logger = logging.getLogger(__name__)

ALLOWED_PERIODS = (7, 30)
DEFAULT_PERIOD = 7
UPCOMING_LIMIT = 5


class StatusCounts(BaseModel):
    todo: int
    in_progress: int
    done: int


class DashboardSummary(BaseModel):
    counts: StatusCounts
    overdue: int
    upcoming: List[TaskResponse]


def parse_period(raw: Optional[str]) -> int:
    """Period in days: '7' (default) or '30'."""
    if raw is None or raw == "":
        return DEFAULT_PERIOD
    if raw not in {str(days) for days in ALLOWED_PERIODS}:
        raise ValidationError("Invalid query: period must be 7 or 30")
    return int(raw)


class DashboardService:
    """Workload summary for one owner."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def _count(self, owner_id: str, *criteria) -> int:
        statement = select(func.count()).select_from(Task).where(Task.owner_id == owner_id, *criteria)
        with Session(self.engine) as session:
            return session.exec(statement).one()

    def _upcoming(self, owner_id: str, now: datetime, until: datetime) -> List[TaskResponse]:
        statement = (
            select(Task)
            .where(
                Task.owner_id == owner_id,
                Task.status != TaskStatus.DONE.value,
                Task.due_date >= now,
                Task.due_date <= until,
            )
            .order_by(Task.due_date.asc(), Task.id.asc())
            .limit(UPCOMING_LIMIT)
        )
        with Session(self.engine) as session:
            return [TaskResponse.from_task(task) for task in session.exec(statement).all()]

    async def summary(
        self,
        owner_id: str,
        period_days: int = DEFAULT_PERIOD,
        now: Optional[datetime] = None,
    ) -> DashboardSummary:
        now = to_utc(now) or utcnow()
        until = now + timedelta(days=period_days)
        not_done = Task.status != TaskStatus.DONE.value

        todo, in_progress, done, overdue, upcoming = await asyncio.gather(
            asyncio.to_thread(self._count, owner_id, Task.status == TaskStatus.TODO.value),
            asyncio.to_thread(self._count, owner_id, Task.status == TaskStatus.IN_PROGRESS.value),
            asyncio.to_thread(self._count, owner_id, Task.status == TaskStatus.DONE.value),
            asyncio.to_thread(self._count, owner_id, not_done, Task.due_date < now),
            asyncio.to_thread(self._upcoming, owner_id, now, until),
        )
        logger.debug("Dashboard for owner %s over %d days", owner_id, period_days)
        return DashboardSummary(
            counts=StatusCounts(todo=todo, in_progress=in_progress, done=done),
            overdue=overdue,
            upcoming=upcoming,
        )
