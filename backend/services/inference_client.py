"""Remote classifier/generator service.

HuggingFaceInferenceClient speaks the Inference API over httpx and raises
RemoteServiceError for every failure, flagging which ones are worth a retry.
RemoteInference is what the orchestrator talks to: it wraps the transports
in a ResilientClient so each call returns a result or None.
"""

import logging
from typing import Protocol

import httpx
from pydantic import ValidationError

from config import settings
from models.schemas.inference import ClassificationResult, SamplingParams
from services import gemini_client
from services.errors import RemoteServiceError
from services.resilient_client import ResilientClient, build_resilient_client

logger = logging.getLogger(__name__)

# Hugging Face answers 503 while a model is still loading
RETRYABLE_STATUS = {503}


class Classifier(Protocol):
    async def classify(self, texts: list[str], candidate_labels: list[str]) -> ClassificationResult:
        ...


class TextGenerator(Protocol):
    async def generate(self, prompt: str, params: SamplingParams) -> str:
        ...


class HuggingFaceInferenceClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api-inference.huggingface.co/models",
        classifier_model: str = "facebook/bart-large-mnli",
        generator_model: str = "mistralai/Mixtral-8x7B-Instruct-v0.1",
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.classifier_model = classifier_model
        self.generator_model = generator_model
        self.timeout = timeout
        self._transport = transport

    async def _post(self, model: str, payload: dict) -> object:
        url = f"{self.base_url}/{model}"
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            raise RemoteServiceError(f"{model}: timed out", retryable=True) from e
        except httpx.TransportError as e:
            raise RemoteServiceError(f"{model}: {e}", retryable=True) from e
        except httpx.HTTPError as e:
            # e.g. an undecodable body; not worth a retry
            raise RemoteServiceError(f"{model}: {e}") from e

        if response.status_code != 200:
            raise RemoteServiceError(
                f"{model}: HTTP {response.status_code}",
                retryable=response.status_code in RETRYABLE_STATUS,
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise RemoteServiceError(f"{model}: response is not JSON") from e

    async def classify(self, texts: list[str], candidate_labels: list[str]) -> ClassificationResult:
        data = await self._post(
            self.classifier_model,
            {"inputs": texts, "parameters": {"candidate_labels": candidate_labels}},
        )
        # One input may come back as a bare object or a one-element list
        if isinstance(data, list):
            data = data[0] if data else None
        if not isinstance(data, dict):
            raise RemoteServiceError(f"{self.classifier_model}: unexpected classification payload")
        try:
            return ClassificationResult(labels=data.get("labels"), scores=data.get("scores"))
        except ValidationError as e:
            raise RemoteServiceError(f"{self.classifier_model}: invalid classification payload") from e

    async def generate(self, prompt: str, params: SamplingParams) -> str:
        data = await self._post(
            self.generator_model,
            {
                "inputs": prompt,
                "parameters": {
                    "temperature": params.temperature,
                    "max_new_tokens": params.max_new_tokens,
                    "return_full_text": False,
                },
            },
        )
        if isinstance(data, list) and data and isinstance(data[0], dict):
            text = data[0].get("generated_text")
            if isinstance(text, str) and text.strip():
                return text.strip()
        raise RemoteServiceError(f"{self.generator_model}: unexpected generation payload")


class RemoteInference:
    """Classifier and generator behind one resilient client.

    Either side may be None (not configured); the matching call then
    returns None without touching the network.
    """

    def __init__(
        self,
        classifier: Classifier | None,
        generator: TextGenerator | None,
        resilient: ResilientClient | None = None,
    ) -> None:
        self.classifier = classifier
        self.generator = generator
        self.resilient = resilient or ResilientClient()

    @property
    def configured(self) -> bool:
        return self.classifier is not None

    async def classify(self, texts: list[str], candidate_labels: list[str]) -> ClassificationResult | None:
        if self.classifier is None:
            return None
        return await self.resilient.call(
            lambda: self.classifier.classify(texts, candidate_labels), name="classification",
        )

    async def generate(self, prompt: str, params: SamplingParams | None = None) -> str | None:
        if self.generator is None:
            return None
        params = params or SamplingParams()
        return await self.resilient.call(
            lambda: self.generator.generate(prompt, params), name="generation",
        )


def _build_generator(hf_client: HuggingFaceInferenceClient | None) -> TextGenerator | None:
    if settings.generation_backend == "gemini":
        client = gemini_client.get_client()
        return gemini_client.GeminiGenerator(client, settings.gemini_model) if client else None
    return hf_client


_remote: RemoteInference | None = None


def get_remote_inference() -> RemoteInference:
    global _remote
    if _remote is None:
        hf_client = None
        if settings.hf_api_key:
            hf_client = HuggingFaceInferenceClient(
                api_key=settings.hf_api_key,
                base_url=settings.hf_api_url,
                classifier_model=settings.hf_classifier_model,
                generator_model=settings.hf_generator_model,
                timeout=settings.remote_timeout_seconds,
            )
        else:
            logger.warning("No HF_API_KEY set - remote classification disabled")
        _remote = RemoteInference(hf_client, _build_generator(hf_client), build_resilient_client())
    return _remote
