"""Pytest configuration and shared fixtures."""

from collections.abc import Generator
from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient

from src.ai_main import app as ai_app
from src.core.clock import FixedClock, get_now
from src.core.config import ScoringConfig
from src.core.store import InMemoryStore, get_store
from src.interface.ai_client import LocalAIService, get_ai_client
from src.main import app


# Mid-day so date-only deadlines land on fractional day counts
FIXED_NOW = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    """Reference time used by scoring tests."""
    return FIXED_NOW


@pytest.fixture
def scoring_config() -> ScoringConfig:
    """Default scoring constants."""
    return ScoringConfig()


@pytest.fixture
def store() -> InMemoryStore:
    """Provides a fresh InMemoryStore for each test."""
    return InMemoryStore()


@pytest.fixture
def api_client(store: InMemoryStore) -> Generator[TestClient, None, None]:
    """Project API client with an isolated store, pinned clock and in-process AI service."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_now] = lambda: FIXED_NOW
    app.dependency_overrides[get_ai_client] = lambda: LocalAIService(clock=FixedClock(FIXED_NOW))
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def ai_client() -> Generator[TestClient, None, None]:
    """AI service client with a pinned clock."""
    ai_app.dependency_overrides[get_now] = lambda: FIXED_NOW
    try:
        yield TestClient(ai_app)
    finally:
        ai_app.dependency_overrides.clear()
