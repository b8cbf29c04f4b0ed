"""Google Gemini text generation backend for the improved resume."""

import logging

import httpx
from google import genai
from google.genai import errors, types

from config import settings
from models.schemas.inference import SamplingParams
from services.errors import RemoteServiceError

logger = logging.getLogger(__name__)

RETRYABLE_CODES = {429, 500, 503}

_client: genai.Client | None = None


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - Gemini generation disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


def strip_code_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return text


class GeminiGenerator:
    def __init__(self, client: genai.Client, model: str = "gemini-2.5-flash") -> None:
        self.client = client
        self.model = model

    async def generate(self, prompt: str, params: SamplingParams) -> str:
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=params.temperature,
                    max_output_tokens=params.max_new_tokens,
                ),
            )
        except errors.APIError as e:
            raise RemoteServiceError(
                f"Gemini API error: {e}",
                retryable=e.code in RETRYABLE_CODES,
                status_code=e.code,
            ) from e
        except httpx.HTTPError as e:
            raise RemoteServiceError(f"Gemini transport error: {e}", retryable=True) from e

        text = strip_code_fences(response.text or "")
        if not text:
            raise RemoteServiceError("Gemini returned an empty response")
        return text
