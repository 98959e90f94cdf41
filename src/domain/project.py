"""Project domain models and enums."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ProjectStatus(StrEnum):
    """Project lifecycle status."""

    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


class Project(BaseModel):
    """Project data transfer object."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int = Field(..., description="Unique project ID assigned by the store")
    title: str = Field(..., description="Project title")
    description: str = Field(..., description="Project description")
    status: ProjectStatus = Field(default=ProjectStatus.ACTIVE, description="Lifecycle status")
    created_at: str = Field(..., description="Creation timestamp (ISO format)")
