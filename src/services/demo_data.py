"""Demo projects and tasks loaded into a fresh store."""

import logging
from datetime import datetime, timedelta

from src.core.clock import resolve_now
from src.core.logging import log_with_context
from src.core.store import Repository
from src.domain.create_models import ProjectCreate, TaskCreate
from src.domain.project import ProjectStatus
from src.domain.task import TaskPriority, TaskStatus
from src.domain.update_models import ProjectUpdate
from src.services import project_service, task_service


logger = logging.getLogger(__name__)

DEMO_PROJECTS: list[tuple[str, str, ProjectStatus]] = [
    (
        "AI Project Manager Development",
        "Building a modern project management tool with AI capabilities",
        ProjectStatus.ACTIVE,
    ),
    (
        "Website Redesign",
        "Updating company website with modern design and features",
        ProjectStatus.PAUSED,
    ),
    (
        "Mobile App Development",
        "Creating cross-platform mobile application",
        ProjectStatus.COMPLETED,
    ),
]


async def seed_demo_data(store: Repository, *, now: datetime | None = None) -> None:
    """Create the demo projects, plus a few tasks for the first one."""
    now = resolve_now(now)

    projects = []
    for title, description, status in DEMO_PROJECTS:
        project = await project_service.create_project(
            store, ProjectCreate(title=title, description=description), now=now
        )
        if status != ProjectStatus.ACTIVE:
            project = await project_service.update_project(store, project.id, ProjectUpdate(status=status))
        projects.append(project)

    first = projects[0]
    design = await task_service.create_task(
        store,
        first.id,
        TaskCreate(
            title="Design the data model",
            description="Projects, tasks and their dependencies",
            status=TaskStatus.COMPLETED,
            complexity=4,
        ),
        now=now,
    )
    api = await task_service.create_task(
        store,
        first.id,
        TaskCreate(
            title="Implement the REST API",
            description="CRUD endpoints for projects and tasks",
            status=TaskStatus.IN_PROGRESS,
            priority=TaskPriority.HIGH,
            complexity=7,
            deadline=(now + timedelta(days=5)).date().isoformat(),
            dependencies=[design.id],
        ),
        now=now,
    )
    await task_service.create_task(
        store,
        first.id,
        TaskCreate(
            title="Deploy to staging",
            description="Ship the API and the scoring service",
            complexity=3,
            deadline=(now + timedelta(days=14)).date().isoformat(),
            dependencies=[api.id],
        ),
        now=now,
    )

    log_with_context(logger, "info", "demo_data_seeded", project_count=len(projects))
