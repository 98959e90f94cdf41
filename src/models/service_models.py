"""Pydantic models for the scoring engine's inputs and outputs.

Field names serialize in camelCase (``aiPriority``, ``estimatedCompletion``) so the
payloads match what the web client and the project API exchange with the AI service.
Scoring inputs keep unknown fields, and the engine returns them untouched on the
augmented copies.
"""

from datetime import date
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ScoringTask(BaseModel):
    """Task as seen by the scoring engine; every field is optional."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: int | str | None = None
    title: str | None = None
    status: str | None = None
    complexity: int | None = None
    deadline: str | None = None
    dependencies: list[Any] | None = None


class ScoringProject(BaseModel):
    """Project context for scoring; a missing status weighs nothing."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: int | str | None = None
    title: str | None = None
    status: str | None = None


class PrioritizedTask(ScoringTask):
    """Task augmented with its computed priority."""

    ai_priority: int = Field(..., description="Clamped priority score")
    priority_reason: str = Field(..., description="Human-readable explanation of the score")
    raw_priority: int = Field(..., description="Accumulated score before clamping (diagnostic)")


class RiskLevel(StrEnum):
    """Predicted project risk."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Prediction(BaseModel):
    """Completion prediction snapshot for a project."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    progress: int = Field(..., ge=0, le=100, description="Completed share of tasks (percent)")
    estimated_completion: date = Field(..., description="Predicted completion date")
    estimated_days_remaining: int = Field(..., ge=0, description="Predicted days until completion")
    risk_level: RiskLevel
    risk_factors: list[str]
    confidence: int = Field(..., ge=0, le=100, description="Confidence in the prediction (percent)")


class ExtractedTask(BaseModel):
    """Candidate task pulled out of free text; never stored automatically."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Batch-local identifier (extracted_<n>)")
    title: str
    description: str
    priority: str = "medium"
    status: str = "todo"
    ai_generated: bool = True


class PrioritizeRequest(BaseModel):
    """Body of POST /api/ai/prioritize-tasks."""

    tasks: list[ScoringTask]
    project: ScoringProject | None = None


class PredictRequest(BaseModel):
    """Body of POST /api/ai/predict-completion."""

    project: ScoringProject | None = None
    tasks: list[ScoringTask]


class ExtractRequest(BaseModel):
    """Body of POST /api/ai/extract-tasks."""

    text: str


class ExtractIntoProjectRequest(ExtractRequest):
    """Body of POST /api/projects/{id}/ai-extract."""

    save: bool = Field(default=False, description="Create the extracted tasks in the project")


class PrioritizedTaskList(BaseModel):
    """Response wrapper for prioritized tasks."""

    tasks: list[PrioritizedTask]


class ExtractedTaskList(BaseModel):
    """Response wrapper for extracted tasks."""

    tasks: list[ExtractedTask]
