"""Heuristic task prioritization.

Each task gets a score built from four additive factors:

- deadline proximity: ``max(0, horizon - days_until_deadline)``
- complexity (taken as-is, so a high value alone can saturate the score)
- the owning project's status weight
- a fixed weight per dependency

The sum is clamped to ``[min_priority, max_priority]``. Scores above the ceiling
are indistinguishable after clamping; the unclamped sum is returned as
``raw_priority`` for callers that need finer ranking.
"""

import logging
import math
from collections.abc import Sequence
from datetime import UTC, datetime

from src.core.clock import resolve_now
from src.core.config import ScoringConfig, settings
from src.core.errors import ErrorCode, InvalidInputError
from src.core.logging import span
from src.models.service_models import PrioritizedTask, ScoringProject, ScoringTask


logger = logging.getLogger(__name__)

_SECONDS_PER_DAY = 24 * 60 * 60

# Output fields that must not be carried over from the input task
_DERIVED_FIELDS = frozenset(
    {"ai_priority", "aiPriority", "priority_reason", "priorityReason", "raw_priority", "rawPriority"}
)


def parse_deadline(value: str) -> datetime:
    """Parse an ISO 8601 date or datetime into an aware UTC datetime.

    Date-only values mean midnight UTC; naive datetimes are taken as UTC.

    Raises:
        InvalidInputError: If the value is not a valid ISO 8601 date
    """
    if not isinstance(value, str):
        raise InvalidInputError(f"Invalid deadline: {value!r}", code=ErrorCode.ERR_INVALID_DATE)
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError as e:
        raise InvalidInputError(f"Invalid deadline: {value!r}", code=ErrorCode.ERR_INVALID_DATE) from e

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


def days_until(deadline: str, now: datetime) -> int:
    """Whole days from ``now`` until ``deadline``, rounded up (negative when past)."""
    delta = parse_deadline(deadline) - now
    return math.ceil(delta.total_seconds() / _SECONDS_PER_DAY)


def project_status_weight(project: ScoringProject | None, config: ScoringConfig) -> int:
    """Return the weight for the project's status, 0 for unknown or missing statuses."""
    if project is None or project.status is None:
        return 0
    return config.status_weights.get(project.status, 0)


def build_priority_reason(task: ScoringTask, days_left: int | None, config: ScoringConfig) -> str:
    """Explain a task's priority independently of its numeric score."""
    reasons = []

    if days_left is not None:
        if days_left <= config.urgent_deadline_days:
            reasons.append("Urgent deadline")
        elif days_left <= config.approaching_deadline_days:
            reasons.append("Approaching deadline")

    if (task.complexity or 0) >= config.high_complexity_threshold:
        reasons.append("High complexity")
    if task.dependencies:
        reasons.append("Has dependencies")

    return ", ".join(reasons) if reasons else "Standard priority"


def score_task(
    task: ScoringTask,
    project: ScoringProject | None,
    *,
    now: datetime,
    config: ScoringConfig,
) -> PrioritizedTask:
    """Score one task and return an augmented copy."""
    accumulator = 0
    days_left = None

    if task.deadline:
        days_left = days_until(task.deadline, now)
        accumulator += max(0, config.deadline_horizon_days - days_left)

    accumulator += task.complexity or 0
    accumulator += project_status_weight(project, config)
    accumulator += config.dependency_weight * len(task.dependencies or [])

    ai_priority = max(config.min_priority, min(accumulator, config.max_priority))

    data = {key: value for key, value in task.model_dump().items() if key not in _DERIVED_FIELDS}
    return PrioritizedTask(
        **data,
        ai_priority=ai_priority,
        priority_reason=build_priority_reason(task, days_left, config),
        raw_priority=accumulator,
    )


def prioritize(
    tasks: Sequence[ScoringTask],
    project: ScoringProject | None,
    *,
    now: datetime | None = None,
    config: ScoringConfig | None = None,
) -> list[PrioritizedTask]:
    """Score tasks against their project and order them by descending priority.

    Args:
        tasks: Tasks to score (not mutated)
        project: Owning project; None is treated like an unknown status
        now: Reference time for deadline proximity (defaults to the system clock)
        config: Scoring constants (defaults to settings.scoring)

    Returns:
        Augmented copies sorted by aiPriority, highest first. The sort is stable,
        so equal scores keep their input order.

    Raises:
        InvalidInputError: If tasks is not a sequence or a deadline cannot be parsed
    """
    if isinstance(tasks, (str, bytes)) or not isinstance(tasks, Sequence):
        raise InvalidInputError("tasks must be a list")

    config = config or settings.scoring
    now = resolve_now(now)

    with span("prioritization_service.prioritize", task_count=len(tasks)):
        scored = [score_task(task, project, now=now, config=config) for task in tasks]
        scored.sort(key=lambda t: t.ai_priority, reverse=True)

    logger.info(
        "tasks_prioritized",
        extra={"task_count": len(scored), "project_status": project.status if project else None},
    )
    return scored
