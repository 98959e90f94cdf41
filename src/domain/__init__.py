"""Domain models and DTOs."""

from src.domain.create_models import ProjectCreate, TaskCreate
from src.domain.project import Project, ProjectStatus
from src.domain.task import Task, TaskPriority, TaskStatus
from src.domain.update_models import ProjectUpdate, TaskUpdate


__all__ = [
    "Project",
    "ProjectCreate",
    "ProjectStatus",
    "ProjectUpdate",
    "Task",
    "TaskCreate",
    "TaskPriority",
    "TaskStatus",
    "TaskUpdate",
]
