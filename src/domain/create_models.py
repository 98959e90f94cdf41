"""Pydantic models for creating records in the store."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.domain.task import TaskPriority, TaskStatus


class ProjectCreate(BaseModel):
    """Payload for creating a project.

    Both fields are optional at the schema level so a missing one yields the
    API's own 400 message instead of a schema validation error.
    """

    title: str | None = Field(default=None, description="Project title")
    description: str | None = Field(default=None, description="Project description")


class TaskCreate(BaseModel):
    """Payload for creating a task inside a project."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str = Field(..., min_length=1, description="Task title")
    description: str = Field(default="", description="Detailed task description")
    status: TaskStatus = Field(default=TaskStatus.TODO, description="Initial status")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="Priority label")
    complexity: int = Field(default=0, ge=0, le=10, description="Estimated complexity (0-10)")
    deadline: str | None = Field(default=None, description="Deadline (ISO date)")
    dependencies: list[int] = Field(default_factory=list, description="IDs of tasks this task depends on")
    ai_generated: bool = Field(default=False, description="True when created from text extraction")
