"""Project CRUD endpoints and the bridge to the AI scoring service."""

import logging

from fastapi import APIRouter, Depends, Query, status

from src.core.store import Repository, get_store
from src.domain.create_models import ProjectCreate, TaskCreate
from src.domain.project import Project
from src.domain.task import Task, TaskStatus
from src.domain.update_models import ProjectUpdate
from src.interface.ai_client import AIService, get_ai_client
from src.models.service_models import (
    ExtractedTaskList,
    ExtractIntoProjectRequest,
    Prediction,
    PredictRequest,
    PrioritizedTaskList,
    PrioritizeRequest,
    ScoringProject,
    ScoringTask,
)
from src.services import project_service, task_service


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("", response_model=list[Project])
async def list_projects(store: Repository = Depends(get_store)) -> list[Project]:
    """List all projects."""
    return await project_service.list_projects(store)


@router.post("", response_model=Project, status_code=status.HTTP_201_CREATED)
async def create_project(body: ProjectCreate, store: Repository = Depends(get_store)) -> Project:
    """Create a project; title and description are required."""
    return await project_service.create_project(store, body)


@router.get("/{project_id}", response_model=Project)
async def get_project(project_id: int, store: Repository = Depends(get_store)) -> Project:
    """Get a single project."""
    return await project_service.get_project(store, project_id)


@router.put("/{project_id}", response_model=Project)
async def update_project(project_id: int, body: ProjectUpdate, store: Repository = Depends(get_store)) -> Project:
    """Update a project's title, description or status."""
    return await project_service.update_project(store, project_id, body)


@router.delete("/{project_id}")
async def delete_project(project_id: int, store: Repository = Depends(get_store)) -> dict[str, str]:
    """Delete a project and its tasks."""
    await project_service.delete_project(store, project_id)
    return {"message": "Project deleted successfully"}


@router.get("/{project_id}/tasks", response_model=list[Task])
async def list_project_tasks(
    project_id: int,
    task_status: TaskStatus | None = Query(default=None, alias="status"),
    store: Repository = Depends(get_store),
) -> list[Task]:
    """List a project's tasks, optionally filtered by status."""
    return await task_service.list_tasks(store, project_id=project_id, status=task_status)


@router.post("/{project_id}/tasks", response_model=Task, status_code=status.HTTP_201_CREATED)
async def create_project_task(project_id: int, body: TaskCreate, store: Repository = Depends(get_store)) -> Task:
    """Create a task in a project."""
    return await task_service.create_task(store, project_id, body)


async def _scoring_inputs(store: Repository, project_id: int) -> tuple[ScoringProject, list[ScoringTask]]:
    """Load a project and its tasks in the shape the AI service expects."""
    project = await project_service.get_project(store, project_id)
    tasks = await task_service.list_tasks(store, project_id=project_id)
    return (
        ScoringProject.model_validate(project.model_dump(mode="json", by_alias=True)),
        [ScoringTask.model_validate(task.model_dump(mode="json", by_alias=True)) for task in tasks],
    )


@router.post("/{project_id}/ai-prioritize", response_model=PrioritizedTaskList)
async def ai_prioritize(
    project_id: int,
    store: Repository = Depends(get_store),
    ai: AIService = Depends(get_ai_client),
) -> PrioritizedTaskList:
    """Rank the project's tasks using the AI service."""
    project, tasks = await _scoring_inputs(store, project_id)
    logger.info("ai_prioritize_requested", extra={"project_id": project_id, "task_count": len(tasks)})
    return await ai.prioritize_tasks(PrioritizeRequest(tasks=tasks, project=project))


@router.post("/{project_id}/ai-predict", response_model=Prediction)
async def ai_predict(
    project_id: int,
    store: Repository = Depends(get_store),
    ai: AIService = Depends(get_ai_client),
) -> Prediction:
    """Predict the project's completion using the AI service."""
    project, tasks = await _scoring_inputs(store, project_id)
    logger.info("ai_predict_requested", extra={"project_id": project_id, "task_count": len(tasks)})
    return await ai.predict_completion(PredictRequest(project=project, tasks=tasks))


@router.post("/{project_id}/ai-extract")
async def ai_extract(
    project_id: int,
    body: ExtractIntoProjectRequest,
    store: Repository = Depends(get_store),
    ai: AIService = Depends(get_ai_client),
) -> ExtractedTaskList | list[Task]:
    """Extract tasks from text; with ``save`` the candidates are created in the project."""
    await project_service.get_project(store, project_id)
    extracted = await ai.extract_tasks(body.text)
    if not body.save:
        return extracted

    created = []
    for candidate in extracted.tasks:
        created.append(
            await task_service.create_task(
                store,
                project_id,
                TaskCreate(title=candidate.title, description=candidate.description, ai_generated=True),
            )
        )
    logger.info("extracted_tasks_saved", extra={"project_id": project_id, "task_count": len(created)})
    return created
