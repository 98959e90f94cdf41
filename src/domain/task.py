"""Task domain models and enums."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TaskStatus(StrEnum):
    """Task lifecycle status."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(StrEnum):
    """Informational priority label set by the author (not the computed score)."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(BaseModel):
    """Task data transfer object."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int = Field(..., description="Unique task ID assigned by the store")
    project_id: int = Field(..., description="Owning project ID")
    title: str = Field(..., description="Task title")
    description: str = Field(default="", description="Detailed task description")
    status: TaskStatus = Field(default=TaskStatus.TODO, description="Current lifecycle status")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="Author-assigned priority label")
    complexity: int = Field(default=0, ge=0, le=10, description="Estimated complexity (0-10)")
    deadline: str | None = Field(default=None, description="Deadline (ISO date)")
    dependencies: list[int] = Field(default_factory=list, description="IDs of tasks this task depends on")
    ai_generated: bool = Field(default=False, description="True when created from text extraction")
    created_at: str = Field(..., description="Creation timestamp (ISO format)")
