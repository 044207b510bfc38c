"""
Task query engine.

Turns raw page/filter/sort parameters into an owner-scoped, paginated listing.

The windowed fetch and the total count run concurrently, each in its own
session. There is no snapshot shared between them: an insert or delete landing
in between can leave ``total`` slightly out of step with ``items``.
"""
import asyncio
import re
from dataclasses import dataclass, field
from typing import List, Optional
import logging

from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from taskdesk.errors import ValidationError
from taskdesk.models.task import Task, TaskStatus, TaskPriority
from taskdesk.schemas.task import TaskPage, TaskResponse
from taskdesk.services.tag_codec import parse_tag_filter

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# Largest OFFSET a signed 64-bit database integer can hold
MAX_OFFSET = 2 ** 63 - 1

INTEGER_PATTERN = re.compile(r"-?[0-9]+")

SORT_FIELDS = {
    "dueDate": Task.due_date,
    "createdAt": Task.created_at,
}
SORT_DIRECTIONS = ("asc", "desc")


@dataclass
class TaskQuery:
    """Validated listing parameters."""
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    tags: List[str] = field(default_factory=list)
    sort_by: str = "createdAt"
    sort_dir: str = "desc"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def _parse_int(raw: Optional[str], name: str, default: int) -> int:
    if raw is None or raw == "":
        return default
    if not INTEGER_PATTERN.fullmatch(raw):
        raise ValidationError(f"Invalid query: {name} must be an integer")
    try:
        return int(raw)
    except ValueError:
        # Too many digits to convert; past every bound either way
        return -MAX_OFFSET if raw.startswith("-") else MAX_OFFSET


def _parse_enum(enum_cls, raw: Optional[str], name: str):
    if raw is None or raw == "":
        return None
    try:
        return enum_cls(raw)
    except ValueError:
        raise ValidationError(f"Invalid query: unknown {name} '{raw}'")


def clamp(value: int, lower: int, upper: Optional[int] = None) -> int:
    value = max(lower, value)
    if upper is not None:
        value = min(upper, value)
    return value


def parse_task_query(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    tags: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_dir: Optional[str] = None,
) -> TaskQuery:
    """
    Validate raw query-string values.

    Unknown enum values are rejected. Integer page/limit values are clamped
    silently (page >= 1, 1 <= limit <= 100), never rejected. Page is also
    capped so the row offset stays within a 64-bit integer.

    Raises:
        ValidationError: on unknown enum values or non-integer page/limit
    """
    sort_by = sort_by or "createdAt"
    if sort_by not in SORT_FIELDS:
        raise ValidationError(f"Invalid query: unknown sortBy '{sort_by}'")

    sort_dir = sort_dir or "desc"
    if sort_dir not in SORT_DIRECTIONS:
        raise ValidationError(f"Invalid query: unknown sortDir '{sort_dir}'")

    limit_value = clamp(_parse_int(limit, "limit", DEFAULT_LIMIT), 1, MAX_LIMIT)
    # Pages past the largest bindable offset are empty anyway
    page_value = clamp(_parse_int(page, "page", DEFAULT_PAGE), 1, MAX_OFFSET // limit_value + 1)

    return TaskQuery(
        page=page_value,
        limit=limit_value,
        status=_parse_enum(TaskStatus, status, "status"),
        priority=_parse_enum(TaskPriority, priority, "priority"),
        tags=parse_tag_filter(tags),
        sort_by=sort_by,
        sort_dir=sort_dir,
    )


def build_task_filters(owner_id: str, query: TaskQuery) -> list:
    """
    WHERE clauses for a listing, AND-composed.

    Each required tag is a substring check on the tag scalar, so a filter for
    "work" also matches a stored "workshop".
    """
    filters = [Task.owner_id == owner_id]
    if query.status is not None:
        filters.append(Task.status == query.status.value)
    if query.priority is not None:
        filters.append(Task.priority == query.priority.value)
    for tag in query.tags:
        filters.append(Task.tags.contains(tag, autoescape=True))
    return filters


def _order_by(query: TaskQuery) -> list:
    column = SORT_FIELDS[query.sort_by]
    ordered = column.asc() if query.sort_dir == "asc" else column.desc()
    if query.sort_by == "dueDate":
        ordered = ordered.nulls_last()
    # Ties on the sort key are not ordered meaningfully; the id keeps paging stable
    return [ordered, Task.id.asc()]


class TaskQueryService:
    """Runs task listings against an engine, one session per sub-query."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def fetch_window(self, owner_id: str, query: TaskQuery) -> List[TaskResponse]:
        statement = (
            select(Task)
            .where(*build_task_filters(owner_id, query))
            .order_by(*_order_by(query))
            .offset(query.offset)
            .limit(query.limit)
        )
        with Session(self.engine) as session:
            return [TaskResponse.from_task(task) for task in session.exec(statement).all()]

    def count_matching(self, owner_id: str, query: TaskQuery) -> int:
        statement = (
            select(func.count())
            .select_from(Task)
            .where(*build_task_filters(owner_id, query))
        )
        with Session(self.engine) as session:
            return session.exec(statement).one()

    async def list_tasks(self, owner_id: str, query: TaskQuery) -> TaskPage:
        """Fetch one page of the owner's tasks and the total match count."""
        items, total = await asyncio.gather(
            asyncio.to_thread(self.fetch_window, owner_id, query),
            asyncio.to_thread(self.count_matching, owner_id, query),
        )
        logger.debug(
            "Listed %d of %d tasks for owner %s (page=%d, limit=%d)",
            len(items), total, owner_id, query.page, query.limit,
        )
        return TaskPage(items=items, total=total, page=query.page, limit=query.limit)
