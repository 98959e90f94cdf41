"""AI scoring service endpoints."""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends

from src.core.clock import get_now
from src.models.service_models import (
    ExtractedTaskList,
    ExtractRequest,
    Prediction,
    PredictRequest,
    PrioritizedTaskList,
    PrioritizeRequest,
)
from src.services import extraction_service, prediction_service, prioritization_service


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["ai"])


@router.post("/prioritize-tasks", response_model=PrioritizedTaskList)
async def prioritize_tasks(body: PrioritizeRequest, now: datetime = Depends(get_now)) -> PrioritizedTaskList:
    """Score and rank the given tasks against their project."""
    tasks = prioritization_service.prioritize(body.tasks, body.project, now=now)
    return PrioritizedTaskList(tasks=tasks)


@router.post("/predict-completion", response_model=Prediction)
async def predict_completion(body: PredictRequest, now: datetime = Depends(get_now)) -> Prediction:
    """Predict the project's completion date and risk."""
    return prediction_service.predict_completion(body.project, body.tasks, now=now)


@router.post("/extract-tasks", response_model=ExtractedTaskList)
async def extract_tasks(body: ExtractRequest) -> ExtractedTaskList:
    """Extract candidate tasks from free text."""
    return ExtractedTaskList(tasks=extraction_service.extract_tasks(body.text))


@router.get("/health")
async def health(now: datetime = Depends(get_now)) -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "AI service healthy", "timestamp": now.isoformat().replace("+00:00", "Z")}
