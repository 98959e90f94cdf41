"""Task CRUD operations over the record store.

Tasks always belong to an existing project. Deadlines are validated on write so
stored tasks can always be scored.
"""

import logging
from datetime import datetime

from src.core.clock import resolve_now
from src.core.errors import ErrorCode, InvalidInputError, NotFoundError
from src.core.logging import span
from src.core.store import RecordNotFoundError, Repository, list_all_records
from src.domain.create_models import TaskCreate
from src.domain.task import Task, TaskStatus
from src.domain.update_models import TaskUpdate
from src.services import project_service
from src.services.prioritization_service import parse_deadline


logger = logging.getLogger(__name__)

TASKS = project_service.TASKS


async def _validate_dependencies(store: Repository, dependencies: list[int], *, task_id: int | None = None) -> None:
    """Ensure every dependency names another existing task."""
    for dependency_id in dependencies:
        if dependency_id == task_id:
            raise InvalidInputError(f"Task {task_id} cannot depend on itself")
        try:
            await store.get_record(collection=TASKS, record_id=dependency_id)
        except RecordNotFoundError as e:
            raise InvalidInputError(f"Dependency task {dependency_id} does not exist") from e


async def get_task(store: Repository, task_id: int) -> Task:
    """Get a task by id.

    Raises:
        NotFoundError: If the task does not exist
    """
    try:
        record = await store.get_record(collection=TASKS, record_id=task_id)
    except RecordNotFoundError as e:
        raise NotFoundError("Task not found", code=ErrorCode.ERR_TASK_NOT_FOUND) from e
    return Task.model_validate(record)


async def list_tasks(
    store: Repository,
    *,
    project_id: int | None = None,
    status: TaskStatus | None = None,
) -> list[Task]:
    """List tasks, optionally restricted to one project and/or status.

    Raises:
        NotFoundError: If project_id is given and the project does not exist
    """
    filters: dict[str, object] = {}
    if project_id is not None:
        await project_service.get_project(store, project_id)
        filters["project_id"] = project_id
    if status is not None:
        filters["status"] = status.value

    records = await list_all_records(store, collection=TASKS, filters=filters)
    return [Task.model_validate(record) for record in records]


async def create_task(
    store: Repository,
    project_id: int,
    data: TaskCreate,
    *,
    now: datetime | None = None,
) -> Task:
    """Create a task inside a project.

    Raises:
        NotFoundError: If the project does not exist
        InvalidInputError: If the deadline or a dependency is invalid
    """
    await project_service.get_project(store, project_id)
    if data.deadline:
        parse_deadline(data.deadline)
    await _validate_dependencies(store, data.dependencies)

    with span("task_service.create_task", project_id=project_id):
        record = await store.create_record(
            collection=TASKS,
            data={
                **data.model_dump(mode="json"),
                "project_id": project_id,
                "created_at": resolve_now(now).isoformat().replace("+00:00", "Z"),
            },
        )

    logger.info("task_created", extra={"task_id": record["id"], "project_id": project_id})
    return Task.model_validate(record)


async def update_task(store: Repository, task_id: int, data: TaskUpdate) -> Task:
    """Apply the fields explicitly set in ``data`` to a task.

    Raises:
        NotFoundError: If the task does not exist
        InvalidInputError: If the deadline or a dependency is invalid
    """
    await get_task(store, task_id)

    # Only the deadline may be cleared
    changes = {
        key: value
        for key, value in data.model_dump(mode="json", exclude_unset=True).items()
        if value is not None or key == "deadline"
    }
    if changes.get("deadline"):
        parse_deadline(changes["deadline"])
    if changes.get("dependencies"):
        await _validate_dependencies(store, changes["dependencies"], task_id=task_id)

    record = await store.update_record(collection=TASKS, record_id=task_id, data=changes)

    logger.info("task_updated", extra={"task_id": task_id, "fields": sorted(changes)})
    return Task.model_validate(record)


async def delete_task(store: Repository, task_id: int) -> None:
    """Delete a task.

    Dependency lists of other tasks are left as they are; a dangling id still
    counts toward the dependent task's score.

    Raises:
        NotFoundError: If the task does not exist
    """
    try:
        await store.delete_record(collection=TASKS, record_id=task_id)
    except RecordNotFoundError as e:
        raise NotFoundError("Task not found", code=ErrorCode.ERR_TASK_NOT_FOUND) from e

    logger.info("task_deleted", extra={"task_id": task_id})
