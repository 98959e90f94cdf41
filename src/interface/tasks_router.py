"""Task endpoints addressed by task id."""

from fastapi import APIRouter, Depends, Query

from src.core.store import Repository, get_store
from src.domain.task import Task, TaskStatus
from src.domain.update_models import TaskUpdate
from src.services import task_service


router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=list[Task])
async def list_tasks(
    task_status: TaskStatus | None = Query(default=None, alias="status"),
    store: Repository = Depends(get_store),
) -> list[Task]:
    """List tasks across all projects."""
    return await task_service.list_tasks(store, status=task_status)


@router.get("/{task_id}", response_model=Task)
async def get_task(task_id: int, store: Repository = Depends(get_store)) -> Task:
    """Get a single task."""
    return await task_service.get_task(store, task_id)


@router.put("/{task_id}", response_model=Task)
async def update_task(task_id: int, body: TaskUpdate, store: Repository = Depends(get_store)) -> Task:
    """Update a task's fields."""
    return await task_service.update_task(store, task_id, body)


@router.delete("/{task_id}")
async def delete_task(task_id: int, store: Repository = Depends(get_store)) -> dict[str, str]:
    """Delete a task."""
    await task_service.delete_task(store, task_id)
    return {"message": "Task deleted successfully"}
