"""Unit tests for the Gemini client adapter (no network)."""

import asyncio
from types import SimpleNamespace

import httpx
import pytest
from google.genai import errors as genai_errors

from resume_analyzer.errors import AIServiceError
from resume_analyzer.services.ai_client import GeminiAnalysisClient


class FakeModels:
    def __init__(self, text="{}", exc=None, delay=0.0):
        self.text = text
        self.exc = exc
        self.delay = delay
        self.calls = []

    async def generate_content(self, *, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.exc is not None:
            raise self.exc
        return SimpleNamespace(text=self.text)


def _client(settings, models: FakeModels, **overrides) -> GeminiAnalysisClient:
    sdk = SimpleNamespace(aio=SimpleNamespace(models=models))
    return GeminiAnalysisClient(settings.model_copy(update=overrides), client=sdk)


def _api_error(cls, code: int, status: str):
    return cls(code, {"error": {"code": code, "message": status.lower(), "status": status}})


@pytest.mark.unit
async def test_returns_raw_text_and_requests_json_mode(settings):
    models = FakeModels(text='{"ai_feedback": {"rating": 7}}')
    client = _client(settings, models, gemini_model="gemini-test")

    result = await client.generate("analyze this")

    assert result.ok
    assert result.value == '{"ai_feedback": {"rating": 7}}'
    assert len(models.calls) == 1
    call = models.calls[0]
    assert call["model"] == "gemini-test"
    assert call["contents"] == "analyze this"
    assert call["config"].response_mime_type == "application/json"


@pytest.mark.unit
async def test_unconfigured_client_fails_without_calling_out(settings):
    client = GeminiAnalysisClient(settings)
    client.init()  # no API key in test settings

    result = await client.generate("prompt")

    assert not client.configured
    assert isinstance(result.error, AIServiceError)


@pytest.mark.unit
async def test_timeout_becomes_service_error(settings):
    models = FakeModels(delay=1.0)
    client = _client(settings, models, ai_timeout_seconds=0.05)

    result = await client.generate("prompt")

    assert not result.ok
    assert isinstance(result.error, AIServiceError)
    assert "timed out" in result.error.detail


@pytest.mark.unit
@pytest.mark.parametrize("exc, fragment", [
    (_api_error(genai_errors.ClientError, 401, "UNAUTHENTICATED"), "API key"),
    (_api_error(genai_errors.ClientError, 429, "RESOURCE_EXHAUSTED"), "rate limit"),
    (_api_error(genai_errors.ServerError, 503, "UNAVAILABLE"), "503"),
    (httpx.ConnectError("connection refused"), "Could not reach Gemini"),
])
async def test_provider_failures_become_service_errors(settings, exc, fragment):
    client = _client(settings, FakeModels(exc=exc))

    result = await client.generate("prompt")

    assert not result.ok
    assert isinstance(result.error, AIServiceError)
    assert fragment in result.error.detail
    assert result.error.category == "service_failure"


@pytest.mark.unit
@pytest.mark.parametrize("text", [None, "", "   "])
async def test_empty_response_is_a_service_error(settings, text):
    client = _client(settings, FakeModels(text=text))

    result = await client.generate("prompt")

    assert isinstance(result.error, AIServiceError)
