"""
Gemini client adapter for resume analysis.

One outbound request per call, JSON mode requested, no retries. The
provider's JSON-mode promise is not trusted; callers still run the
response through the normalizer.
"""
import asyncio
import logging
from typing import Optional

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from ..config import Settings
from ..errors import AIServiceError
from ..results import Err, Ok, Result

logger = logging.getLogger(__name__)


def _describe_api_error(e: genai_errors.APIError) -> str:
    code = getattr(e, "code", None)
    if code in (401, 403):
        return "Gemini rejected the API key"
    if code == 429:
        return "Gemini rate limit or quota exceeded. Try again later."
    if code is not None and code >= 500:
        return f"Gemini service error ({code})"
    return f"Gemini request failed ({code}): {e}"


class GeminiAnalysisClient:
    """
    Thin wrapper around the google-genai async API.
    Created by the entry point; init() must run before generate().
    """

    def __init__(self, settings: Settings, client: Optional[genai.Client] = None):
        self.api_key = settings.gemini_api_key
        self.model = settings.gemini_model
        self.temperature = settings.gemini_temperature
        self.timeout = settings.ai_timeout_seconds
        self._client = client

    def init(self) -> None:
        if self._client is not None:
            return
        if not self.api_key:
            logger.warning("GEMINI_API_KEY not set - resume analysis disabled")
            return
        self._client = genai.Client(api_key=self.api_key)
        logger.info("Gemini client initialized: model=%s", self.model)

    def shutdown(self) -> None:
        self._client = None

    @property
    def configured(self) -> bool:
        return self._client is not None

    async def generate(self, prompt: str) -> Result[str]:
        """Send the prompt and return the raw response text."""
        if self._client is None:
            return Err(AIServiceError("Gemini API not configured. Please set GEMINI_API_KEY."))

        config = genai_types.GenerateContentConfig(
            temperature=self.temperature,
            response_mime_type="application/json",
        )
        logger.info("Gemini call: model=%s prompt=%d chars", self.model, len(prompt))

        try:
            response = await asyncio.wait_for(
                self._client.aio.models.generate_content(
                    model=self.model,
                    contents=prompt,
                    config=config,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.error("Gemini call timed out after %ss", self.timeout)
            return Err(AIServiceError(f"Gemini request timed out after {self.timeout}s"))
        except genai_errors.APIError as e:
            logger.error("Gemini API error: %s", e)
            return Err(AIServiceError(_describe_api_error(e)))
        except httpx.HTTPError as e:
            logger.error("Gemini network error: %s", e)
            return Err(AIServiceError(f"Could not reach Gemini: {e}"))

        text = response.text
        if not text or not text.strip():
            return Err(AIServiceError("Gemini returned an empty response"))

        logger.info("Gemini response: %d chars", len(text))
        return Ok(text)
