"""Client used by the project API to reach the AI scoring service.

Two implementations share one interface:

- ``AIServiceClient`` calls the AI service over HTTP with retry on transport
  errors and 5xx responses. When it gives up it raises UpstreamUnavailableError
  instead of inventing a default score.
- ``LocalAIService`` runs the scoring engine in-process (``AI_SERVICE_MODE=local``).
"""

import asyncio
import logging
from typing import Any, Protocol, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from src.core.clock import Clock, system_now
from src.core.config import ScoringConfig, constants, settings
from src.core.errors import InvalidInputError, UpstreamUnavailableError
from src.models.service_models import (
    ExtractedTaskList,
    Prediction,
    PredictRequest,
    PrioritizedTaskList,
    PrioritizeRequest,
)
from src.services import extraction_service, prediction_service, prioritization_service


logger = logging.getLogger(__name__)

# HTTP status code constants for error handling
HTTP_CLIENT_ERROR_START = 400
HTTP_CLIENT_ERROR_END = 500

T = TypeVar("T", bound=BaseModel)


class AIService(Protocol):
    """Operations the project API needs from the scoring engine."""

    async def prioritize_tasks(self, request: PrioritizeRequest) -> PrioritizedTaskList: ...

    async def predict_completion(self, request: PredictRequest) -> Prediction: ...

    async def extract_tasks(self, text: str) -> ExtractedTaskList: ...


class AIServiceClient:
    """HTTP client for the AI service."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float,
        max_retries: int,
        retry_delay: float = constants.AI_SERVICE_RETRY_DELAY_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self._transport = transport

    async def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST JSON to the AI service with retry.

        Raises:
            InvalidInputError: If the AI service rejected the payload (4xx)
            UpstreamUnavailableError: If the service is unreachable or keeps failing
        """
        url = f"{self.base_url}{path}"
        last_error = "no attempt made"

        for attempt in range(self.max_retries):
            try:
                async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                    response = await client.post(url, json=payload)

                if response.is_success:
                    return _decode_body(response)

                if HTTP_CLIENT_ERROR_START <= response.status_code < HTTP_CLIENT_ERROR_END:
                    raise InvalidInputError(_error_message(response))

                last_error = f"AI service returned status {response.status_code}"
            except httpx.TransportError as e:
                last_error = f"{type(e).__name__}: {e}"

            logger.warning(
                "ai_service_call_failed",
                extra={"path": path, "attempt": attempt + 1, "max_retries": self.max_retries, "error": last_error},
            )
            if attempt < self.max_retries - 1:
                await asyncio.sleep(self.retry_delay * (2**attempt))

        logger.error("ai_service_unavailable", extra={"path": path, "error": last_error})
        raise UpstreamUnavailableError(f"AI service unavailable after {self.max_retries} attempts: {last_error}")

    async def prioritize_tasks(self, request: PrioritizeRequest) -> PrioritizedTaskList:
        data = await self._post("/api/ai/prioritize-tasks", request.model_dump(mode="json", by_alias=True))
        return _parse(PrioritizedTaskList, data)

    async def predict_completion(self, request: PredictRequest) -> Prediction:
        data = await self._post("/api/ai/predict-completion", request.model_dump(mode="json", by_alias=True))
        return _parse(Prediction, data)

    async def extract_tasks(self, text: str) -> ExtractedTaskList:
        data = await self._post("/api/ai/extract-tasks", {"text": text})
        return _parse(ExtractedTaskList, data)


class LocalAIService:
    """Scoring engine called in-process, no network hop."""

    def __init__(self, *, clock: Clock = system_now, config: ScoringConfig | None = None) -> None:
        self._clock = clock
        self._config = config

    async def prioritize_tasks(self, request: PrioritizeRequest) -> PrioritizedTaskList:
        tasks = prioritization_service.prioritize(
            request.tasks, request.project, now=self._clock(), config=self._config
        )
        return PrioritizedTaskList(tasks=tasks)

    async def predict_completion(self, request: PredictRequest) -> Prediction:
        return prediction_service.predict_completion(
            request.project, request.tasks, now=self._clock(), config=self._config
        )

    async def extract_tasks(self, text: str) -> ExtractedTaskList:
        return ExtractedTaskList(tasks=extraction_service.extract_tasks(text, config=self._config))


def _decode_body(response: httpx.Response) -> dict[str, Any]:
    """Decode a successful AI service reply.

    Raises:
        UpstreamUnavailableError: If the body is not a JSON object
    """
    try:
        body = response.json()
    except ValueError as e:
        logger.error("ai_service_bad_reply", extra={"status": response.status_code, "error": str(e)})
        raise UpstreamUnavailableError("AI service returned a reply that is not JSON") from e
    if not isinstance(body, dict):
        raise UpstreamUnavailableError("AI service returned an unexpected reply")
    return body


def _parse(model: type[T], data: dict[str, Any]) -> T:
    """Validate an AI service reply, treating a malformed one as an upstream failure."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.error("ai_service_bad_reply", extra={"model": model.__name__, "error_count": e.error_count()})
        raise UpstreamUnavailableError(f"AI service returned a malformed {model.__name__} reply") from e


def _error_message(response: httpx.Response) -> str:
    """Pull the error message out of an AI service error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"AI service rejected the request ({response.status_code})"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"AI service rejected the request ({response.status_code})"


def get_ai_client() -> AIService:
    """FastAPI dependency selecting the AI service implementation from settings."""
    if settings.ai_service_mode == "local":
        return LocalAIService()
    return AIServiceClient(
        base_url=settings.ai_service_url,
        timeout=settings.ai_service_timeout_seconds,
        max_retries=settings.ai_service_max_retries,
    )
