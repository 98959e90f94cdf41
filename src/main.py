"""taskpilot - project API with AI-assisted prioritization and completion prediction."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.core import store as store_module
from src.core.clock import get_now
from src.core.config import settings
from src.core.logging import configure_logfire, instrument_fastapi, instrument_httpx
from src.interface.error_handlers import register_error_handlers
from src.interface.projects_router import router as projects_router
from src.interface.tasks_router import router as tasks_router
from src.services.demo_data import seed_demo_data


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    # Startup
    configure_logfire()
    instrument_httpx()

    store = store_module.reset_store()
    if settings.seed_demo_data:
        await seed_demo_data(store)

    logger.info(
        "api_started",
        extra={"ai_service_mode": settings.ai_service_mode, "ai_service_url": settings.ai_service_url},
    )
    yield
    # Shutdown
    logger.info("api_stopped")


app = FastAPI(
    title="taskpilot",
    description="Project management API with heuristic task prioritization",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Instrument FastAPI with Logfire
instrument_fastapi(app)

register_error_handlers(app)

# Register routers
app.include_router(projects_router)
app.include_router(tasks_router)


@app.get("/")
async def root(now: datetime = Depends(get_now)) -> JSONResponse:
    """Service banner."""
    return JSONResponse(
        content={
            "message": "AI Project Manager API",
            "status": "running",
            "timestamp": now.isoformat().replace("+00:00", "Z"),
        }
    )


@app.get("/health")
@app.get("/api/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "healthy"}, status_code=200)
