"""Configuration management for taskpilot."""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScoringConfig(BaseModel):
    """Tunable constants for the prioritization, prediction and extraction heuristics."""

    # Priority scoring
    deadline_horizon_days: int = Field(default=10, ge=0, description="Deadline factor is max(0, horizon - days left)")
    max_priority: int = Field(default=10, ge=0, description="Upper clamp for aiPriority")
    min_priority: int = Field(default=0, ge=0, description="Lower clamp for aiPriority")
    status_weights: dict[str, int] = Field(
        default_factory=lambda: {"active": 5, "paused": 2, "completed": 0},
        description="Project status weight added to every task score; unknown statuses weigh 0"
    )
    dependency_weight: int = Field(default=2, ge=0, description="Score added per dependency entry")
    urgent_deadline_days: int = Field(default=3, ge=0, description="Days left at or below which a deadline is urgent")
    approaching_deadline_days: int = Field(
        default=7, ge=0, description="Days left at or below which a deadline approaches"
    )
    high_complexity_threshold: int = Field(
        default=7, ge=0, description="Complexity at or above which a task is complex"
    )

    # Completion prediction
    days_per_task: int = Field(default=3, ge=0, description="Assumed average days to finish one task")
    low_progress_percent: int = Field(
        default=30, ge=0, le=100, description="Progress below which an active project is at risk"
    )
    high_task_count: int = Field(default=20, ge=0, description="Remaining tasks above which a project is at risk")
    risk_factor_penalty: int = Field(default=20, ge=0, description="Confidence lost per triggered risk factor")
    min_confidence: int = Field(default=20, ge=0, le=100, description="Confidence floor")

    # Text extraction
    action_words: list[str] = Field(
        default_factory=lambda: [
            "create",
            "build",
            "implement",
            "design",
            "develop",
            "test",
            "deploy",
            "fix",
            "update",
            "review",
        ],
        description="Verbs that mark a sentence as an actionable task"
    )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="taskpilot", description="Service name reported to logfire")
    environment: str = Field(default="development", description="Deployment environment name")

    # Project API
    api_port: int = Field(default=5000, description="Port for the project API")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"], description="Origins allowed to call the APIs"
    )
    seed_demo_data: bool = Field(default=True, description="Load the demo projects into the store on startup")

    # AI service
    ai_service_port: int = Field(default=5001, description="Port for the AI scoring service")
    ai_service_url: str = Field(default="http://127.0.0.1:5001", description="Base URL of the AI scoring service")
    ai_service_mode: Literal["http", "local"] = Field(
        default="http",
        description="'http' calls the AI service over the network, 'local' runs the scoring engine in-process"
    )
    ai_service_timeout_seconds: float = Field(default=10.0, description="Timeout for calls to the AI service")
    ai_service_max_retries: int = Field(default=3, description="Attempts made for a failing AI service call")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")

    scoring: ScoringConfig = Field(default_factory=ScoringConfig, description="Scoring heuristics")


# Application Constants
class Constants:
    """Application-wide constants."""

    # HTTP Status Codes
    HTTP_BAD_REQUEST: int = 400
    HTTP_NOT_FOUND: int = 404
    HTTP_SERVER_ERROR: int = 500
    HTTP_SERVICE_UNAVAILABLE: int = 503

    # AI service retries
    AI_SERVICE_RETRY_DELAY_SECONDS: float = 0.5

    # Store
    DEFAULT_PER_PAGE_LIMIT: int = 100


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
