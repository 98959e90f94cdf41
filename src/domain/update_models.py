"""Update models for store operations."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.domain.project import ProjectStatus
from src.domain.task import TaskPriority, TaskStatus


class ProjectUpdate(BaseModel):
    """Partial update for a project; falsy fields are left unchanged."""

    title: str | None = None
    description: str | None = None
    status: ProjectStatus | None = None


class TaskUpdate(BaseModel):
    """Partial update for a task; only fields present in the request are applied."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    complexity: int | None = Field(default=None, ge=0, le=10)
    deadline: str | None = None
    dependencies: list[int] | None = None
