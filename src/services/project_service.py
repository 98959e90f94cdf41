"""Project CRUD operations over the record store."""

import logging
from datetime import datetime

from src.core.clock import resolve_now
from src.core.errors import ErrorCode, InvalidInputError, NotFoundError
from src.core.logging import span
from src.core.store import RecordNotFoundError, Repository, list_all_records
from src.domain.create_models import ProjectCreate
from src.domain.project import Project, ProjectStatus
from src.domain.update_models import ProjectUpdate


logger = logging.getLogger(__name__)

PROJECTS = "projects"
TASKS = "tasks"


async def get_project(store: Repository, project_id: int) -> Project:
    """Get a project by id.

    Raises:
        NotFoundError: If the project does not exist
    """
    try:
        record = await store.get_record(collection=PROJECTS, record_id=project_id)
    except RecordNotFoundError as e:
        raise NotFoundError("Project not found", code=ErrorCode.ERR_PROJECT_NOT_FOUND) from e
    return Project.model_validate(record)


async def list_projects(store: Repository) -> list[Project]:
    """Return all projects ordered by id."""
    records = await list_all_records(store, collection=PROJECTS)
    return [Project.model_validate(record) for record in records]


async def create_project(store: Repository, data: ProjectCreate, *, now: datetime | None = None) -> Project:
    """Create an active project.

    Raises:
        InvalidInputError: If title or description is missing or blank
    """
    if not data.title or not data.description:
        raise InvalidInputError("Title and description are required")

    with span("project_service.create_project"):
        record = await store.create_record(
            collection=PROJECTS,
            data={
                "title": data.title,
                "description": data.description,
                "status": ProjectStatus.ACTIVE.value,
                "created_at": resolve_now(now).isoformat().replace("+00:00", "Z"),
            },
        )

    logger.info("project_created", extra={"project_id": record["id"]})
    return Project.model_validate(record)


async def update_project(store: Repository, project_id: int, data: ProjectUpdate) -> Project:
    """Apply the non-empty fields of ``data`` to a project.

    Raises:
        NotFoundError: If the project does not exist
    """
    changes = {key: value for key, value in data.model_dump(mode="json").items() if value}

    try:
        record = await store.update_record(collection=PROJECTS, record_id=project_id, data=changes)
    except RecordNotFoundError as e:
        raise NotFoundError("Project not found", code=ErrorCode.ERR_PROJECT_NOT_FOUND) from e

    logger.info("project_updated", extra={"project_id": project_id, "fields": sorted(changes)})
    return Project.model_validate(record)


async def delete_project(store: Repository, project_id: int) -> None:
    """Delete a project together with its tasks.

    Raises:
        NotFoundError: If the project does not exist
    """
    with span("project_service.delete_project", project_id=project_id):
        try:
            await store.delete_record(collection=PROJECTS, record_id=project_id)
        except RecordNotFoundError as e:
            raise NotFoundError("Project not found", code=ErrorCode.ERR_PROJECT_NOT_FOUND) from e

        orphans = await list_all_records(store, collection=TASKS, filters={"project_id": project_id})
        for task in orphans:
            await store.delete_record(collection=TASKS, record_id=task["id"])

    logger.info("project_deleted", extra={"project_id": project_id, "deleted_tasks": len(orphans)})
