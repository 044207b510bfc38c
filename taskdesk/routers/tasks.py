"""Task router: listing, CRUD and status transitions for the caller's tasks."""
from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from taskdesk.errors import NotFoundError
from taskdesk.middleware.auth import get_current_owner
from taskdesk.routers.deps import (
    get_task_query_service,
    get_task_service,
    parse_resource_id,
)
from taskdesk.schemas.common import Acknowledgement, ApiResponse, ok
from taskdesk.schemas.task import (
    TaskCreate,
    TaskPage,
    TaskResponse,
    TaskStatusUpdate,
    TaskUpdate,
)
from taskdesk.services.ownership import OwnershipPolicy
from taskdesk.services.task_query import TaskQueryService, parse_task_query
from taskdesk.services.task_service import TaskService

router = APIRouter(tags=["Tasks"])


@router.get("", response_model=ApiResponse[TaskPage], response_model_exclude_unset=True)
async def list_tasks(
    owner_id: str = Depends(get_current_owner),
    query_service: TaskQueryService = Depends(get_task_query_service),
    page: Optional[str] = Query(None, description="Page number, clamped to >= 1"),
    limit: Optional[str] = Query(None, description="Page size, clamped to 1..100"),
    status_filter: Optional[str] = Query(None, alias="status", description="todo, in_progress or done"),
    priority: Optional[str] = Query(None, description="low, medium or high"),
    tags: Optional[str] = Query(None, description="Comma-separated tags, all required"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="dueDate or createdAt"),
    sort_dir: Optional[str] = Query(None, alias="sortDir", description="asc or desc"),
):
    """List the caller's tasks with filtering, sorting and pagination."""
    query = parse_task_query(
        page=page,
        limit=limit,
        status=status_filter,
        priority=priority,
        tags=tags,
        sort_by=sort_by,
        sort_dir=sort_dir,
    )
    return ok(await query_service.list_tasks(owner_id, query))


@router.post(
    "",
    response_model=ApiResponse[TaskResponse],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_task(
    task_data: TaskCreate,
    owner_id: str = Depends(get_current_owner),
    service: TaskService = Depends(get_task_service),
):
    """Create a task; it starts in todo."""
    task = service.create(
        owner_id=owner_id,
        title=task_data.title,
        description=task_data.description,
        priority=task_data.priority,
        due_date=task_data.due_date,
        tags=task_data.tags,
    )
    return ok(TaskResponse.from_task(task))


@router.get("/{task_id}", response_model=ApiResponse[TaskResponse], response_model_exclude_unset=True)
async def get_task(
    task_id: str,
    owner_id: str = Depends(get_current_owner),
    service: TaskService = Depends(get_task_service),
):
    """Get one of the caller's tasks; other owners' tasks read as missing."""
    task = service.get_owned(owner_id, parse_resource_id(task_id), OwnershipPolicy.MASK_AS_NOT_FOUND)
    return ok(TaskResponse.from_task(task))


@router.put("/{task_id}", response_model=ApiResponse[TaskResponse], response_model_exclude_unset=True)
async def update_task(
    task_id: str,
    task_data: TaskUpdate,
    owner_id: str = Depends(get_current_owner),
    service: TaskService = Depends(get_task_service),
):
    """Update the fields present in the body."""
    task = service.update(
        owner_id,
        parse_resource_id(task_id),
        task_data.model_dump(exclude_unset=True),
    )
    return ok(TaskResponse.from_task(task))


@router.delete("/{task_id}", response_model=ApiResponse[Acknowledgement], response_model_exclude_unset=True)
async def delete_task(
    task_id: str,
    owner_id: str = Depends(get_current_owner),
    service: TaskService = Depends(get_task_service),
):
    """Delete one of the caller's tasks."""
    if not service.delete(owner_id, parse_resource_id(task_id)):
        raise NotFoundError("Task not found")
    return ok(Acknowledgement(success=True))


@router.patch("/{task_id}/status", response_model=ApiResponse[TaskResponse], response_model_exclude_unset=True)
async def update_task_status(
    task_id: str,
    body: TaskStatusUpdate,
    owner_id: str = Depends(get_current_owner),
    service: TaskService = Depends(get_task_service),
):
    """Move a task to a new status; completedAt follows."""
    task = service.set_status(owner_id, parse_resource_id(task_id), body.status)
    return ok(TaskResponse.from_task(task))
