"""Console entry points that run the two services with uvicorn."""

import uvicorn

from src.core.config import settings


def run_api() -> None:
    """Run the project API."""
    uvicorn.run("src.main:app", host="0.0.0.0", port=settings.api_port)


def run_ai_service() -> None:
    """Run the AI scoring service."""
    uvicorn.run("src.ai_main:app", host="0.0.0.0", port=settings.ai_service_port)
