"""Project completion prediction.

Progress is the completed share of tasks. The remaining work is estimated at a
fixed number of days per open task, and risk is derived from a short list of
independent factors. Nothing is measured; the numbers are deterministic for a
given task set and reference time.
"""

import logging
import math
from collections.abc import Sequence
from datetime import datetime, timedelta

from src.core.clock import resolve_now
from src.core.config import ScoringConfig, settings
from src.core.errors import InvalidInputError
from src.core.logging import span
from src.domain.project import ProjectStatus
from src.domain.task import TaskStatus
from src.models.service_models import Prediction, RiskLevel, ScoringProject, ScoringTask


logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (50.5 -> 51)."""
    return math.floor(value + 0.5)


def collect_risk_factors(
    project: ScoringProject | None,
    *,
    progress: int,
    remaining: int,
    config: ScoringConfig,
) -> list[str]:
    """Return triggered risk factors in their fixed reporting order."""
    status = project.status if project else None
    factors = []

    if progress < config.low_progress_percent and status == ProjectStatus.ACTIVE:
        factors.append("Low progress")
    if remaining > config.high_task_count:
        factors.append("High task count")
    if status == ProjectStatus.PAUSED:
        factors.append("Project paused")

    return factors


def risk_level_for(factor_count: int) -> RiskLevel:
    """Map the number of risk factors to a level: 0 low, 1 medium, 2+ high."""
    if factor_count == 0:
        return RiskLevel.LOW
    if factor_count == 1:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def predict_completion(
    project: ScoringProject | None,
    tasks: Sequence[ScoringTask],
    *,
    now: datetime | None = None,
    config: ScoringConfig | None = None,
) -> Prediction:
    """Predict when a project will be finished.

    Args:
        project: Project being predicted (not mutated)
        tasks: All of the project's tasks (not mutated)
        now: Reference time; its UTC date is "today"
        config: Scoring constants (defaults to settings.scoring)

    Returns:
        Prediction snapshot

    Raises:
        InvalidInputError: If tasks is not a sequence
    """
    if isinstance(tasks, (str, bytes)) or not isinstance(tasks, Sequence):
        raise InvalidInputError("tasks must be a list")

    config = config or settings.scoring
    now = resolve_now(now)

    with span("prediction_service.predict_completion", task_count=len(tasks)):
        total = len(tasks)
        completed = sum(1 for task in tasks if task.status == TaskStatus.COMPLETED)
        progress = round_half_up(100 * completed / total) if total > 0 else 0

        remaining = total - completed
        days_remaining = remaining * config.days_per_task

        factors = collect_risk_factors(project, progress=progress, remaining=remaining, config=config)
        confidence = max(config.min_confidence, 100 - config.risk_factor_penalty * len(factors))

        prediction = Prediction(
            progress=progress,
            estimated_completion=now.date() + timedelta(days=days_remaining),
            estimated_days_remaining=days_remaining,
            risk_level=risk_level_for(len(factors)),
            risk_factors=factors,
            confidence=confidence,
        )

    logger.info(
        "completion_predicted",
        extra={"task_count": total, "progress": progress, "risk_level": prediction.risk_level.value},
    )
    return prediction
