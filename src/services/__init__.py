from src.services import (
    extraction_service,
    prediction_service,
    prioritization_service,
    project_service,
    task_service,
)


__all__ = [
    "extraction_service",
    "prediction_service",
    "prioritization_service",
    "project_service",
    "task_service",
]
