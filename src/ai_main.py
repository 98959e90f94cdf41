"""taskpilot AI service - stateless scoring endpoints."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.core.config import settings
from src.core.logging import configure_logfire, instrument_fastapi
from src.interface.ai_router import router as ai_router
from src.interface.error_handlers import register_error_handlers


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    configure_logfire(service_name=f"{settings.app_name}-ai")
    logger.info("ai_service_started", extra={"port": settings.ai_service_port})
    yield
    logger.info("ai_service_stopped")


app = FastAPI(
    title="taskpilot-ai",
    description="Heuristic task prioritization, completion prediction and task extraction",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

instrument_fastapi(app)

register_error_handlers(app)

app.include_router(ai_router)
