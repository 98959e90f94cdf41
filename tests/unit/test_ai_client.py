"""Tests for the AI service client using httpx.MockTransport."""

import json
from collections.abc import Generator
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from src.core.clock import FixedClock
from src.core.errors import InvalidInputError, UpstreamUnavailableError
from src.interface.ai_client import AIServiceClient, LocalAIService, get_ai_client
from src.models.service_models import PredictRequest, PrioritizeRequest, ScoringProject, ScoringTask


PREDICTION_BODY = {
    "progress": 50,
    "estimatedCompletion": "2026-01-18",
    "estimatedDaysRemaining": 3,
    "riskLevel": "low",
    "riskFactors": [],
    "confidence": 100,
}


@pytest.fixture(autouse=True)
def mock_asyncio_sleep() -> Generator[AsyncMock, None, None]:
    """Mock asyncio.sleep to avoid actual delays in retry tests."""
    with patch("src.interface.ai_client.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        yield mock_sleep


def _client(handler, max_retries: int = 3) -> AIServiceClient:
    return AIServiceClient(
        base_url="http://ai.test/",
        timeout=1.0,
        max_retries=max_retries,
        retry_delay=0.5,
        transport=httpx.MockTransport(handler),
    )


def _predict_request() -> PredictRequest:
    return PredictRequest(
        project=ScoringProject(id=1, status="active"),
        tasks=[ScoringTask(id=1, status="completed"), ScoringTask(id=2, status="todo")],
    )


@pytest.mark.unit
class TestAIServiceClient:
    """Tests for AIServiceClient."""

    async def test_predict_completion_posts_camel_case_payload(self):
        """Test predict completion posts camel case payload."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=PREDICTION_BODY)

        prediction = await _client(handler).predict_completion(_predict_request())

        assert seen["url"] == "http://ai.test/api/ai/predict-completion"
        assert seen["body"]["project"]["status"] == "active"
        assert [t["status"] for t in seen["body"]["tasks"]] == ["completed", "todo"]
        assert prediction.progress == 50
        assert prediction.estimated_days_remaining == 3

    async def test_prioritize_tasks_parses_scores(self):
        """Test prioritize tasks parses scores."""
        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            scores = {"aiPriority": 7, "priorityReason": "Has dependencies", "rawPriority": 7}
            tasks = [{**t, **scores} for t in body["tasks"]]
            return httpx.Response(200, json={"tasks": tasks})

        result = await _client(handler).prioritize_tasks(
            PrioritizeRequest(tasks=[ScoringTask(id=3, title="x")], project=ScoringProject(status="paused"))
        )

        assert result.tasks[0].ai_priority == 7
        assert result.tasks[0].title == "x"

    async def test_extract_tasks(self):
        """Test extract tasks."""
        def handler(request: httpx.Request) -> httpx.Response:
            assert json.loads(request.content) == {"text": "Build it."}
            return httpx.Response(
                200,
                json={"tasks": [{"id": "extracted_0", "title": "Build it", "description": "d", "aiGenerated": True}]},
            )

        result = await _client(handler).extract_tasks("Build it.")

        assert [t.title for t in result.tasks] == ["Build it"]

    async def test_connection_error_raises_upstream_unavailable(self, mock_asyncio_sleep):
        """Test connection error raises upstream unavailable."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            raise httpx.ConnectError("Connection refused", request=request)

        with pytest.raises(UpstreamUnavailableError, match="after 3 attempts"):
            await _client(handler).predict_completion(_predict_request())

        assert len(calls) == 3
        assert [c.args[0] for c in mock_asyncio_sleep.await_args_list] == [0.5, 1.0]

    async def test_timeout_raises_upstream_unavailable(self):
        """Test timeout raises upstream unavailable."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(UpstreamUnavailableError):
            await _client(handler, max_retries=1).extract_tasks("Fix it.")

    async def test_server_error_is_retried(self):
        """Test server error is retried."""
        responses = iter([httpx.Response(503), httpx.Response(200, json=PREDICTION_BODY)])

        def handler(request: httpx.Request) -> httpx.Response:
            return next(responses)

        prediction = await _client(handler).predict_completion(_predict_request())

        assert prediction.confidence == 100

    async def test_persistent_server_error_raises_upstream_unavailable(self):
        """Test persistent server error raises upstream unavailable."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="oops")

        with pytest.raises(UpstreamUnavailableError, match="status 500"):
            await _client(handler, max_retries=2).predict_completion(_predict_request())

    async def test_client_error_is_relayed_without_retry(self):
        """Test client error is relayed without retry."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(400, json={"error": "Invalid deadline: 'soon'", "code": "ERR_INVALID_DATE"})

        with pytest.raises(InvalidInputError, match="Invalid deadline"):
            await _client(handler).predict_completion(_predict_request())

        assert len(calls) == 1

    async def test_non_json_success_reply_raises_upstream_unavailable(self):
        """Test a 2xx reply that is not JSON is reported as an upstream failure."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>proxy error</html>")

        with pytest.raises(UpstreamUnavailableError, match="not JSON"):
            await _client(handler).predict_completion(_predict_request())

    async def test_malformed_success_reply_raises_upstream_unavailable(self):
        """Test a 2xx JSON reply of the wrong shape is reported as an upstream failure."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"unexpected": True})

        with pytest.raises(UpstreamUnavailableError, match="malformed Prediction"):
            await _client(handler).predict_completion(_predict_request())

    async def test_non_object_success_reply_raises_upstream_unavailable(self):
        """Test a 2xx JSON reply that is not an object is reported as an upstream failure."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=["Build it"])

        with pytest.raises(UpstreamUnavailableError):
            await _client(handler).extract_tasks("Build it.")


@pytest.mark.unit
class TestLocalAIService:
    """Tests for the in-process implementation."""

    async def test_uses_injected_clock(self, now):
        """Test uses injected clock."""
        service = LocalAIService(clock=FixedClock(now))

        prediction = await service.predict_completion(_predict_request())

        assert prediction.progress == 50
        assert prediction.estimated_completion.isoformat() == "2026-01-18"

    async def test_prioritize(self, now):
        """Test in-process prioritization."""
        service = LocalAIService(clock=FixedClock(now))

        result = await service.prioritize_tasks(
            PrioritizeRequest(tasks=[ScoringTask(id=1), ScoringTask(id=2, complexity=4)], project=None)
        )

        assert [t.id for t in result.tasks] == [2, 1]


@pytest.mark.unit
def test_get_ai_client_follows_settings(monkeypatch):
    """Test get AI client follows settings."""
    monkeypatch.setattr("src.interface.ai_client.settings.ai_service_mode", "local")
    assert isinstance(get_ai_client(), LocalAIService)

    monkeypatch.setattr("src.interface.ai_client.settings.ai_service_mode", "http")
    monkeypatch.setattr("src.interface.ai_client.settings.ai_service_url", "http://ai:5001")
    client = get_ai_client()
    assert isinstance(client, AIServiceClient)
    assert client.base_url == "http://ai:5001"
