"""LLM client interface and implementations."""

import time
from abc import ABC, abstractmethod

import httpx

from docqa.config import OpenAISettings
from docqa.exceptions import ErrorCode, LLMError
from docqa.llm.models import GenerationResult, Message
from docqa.logging_config import get_logger
from docqa.observability.metrics import track_llm_request

logger = get_logger(__name__)

GENERATION_FAILED_MESSAGE = "Failed to generate response"
# Upstream error bodies are logged, cut to this length.
MAX_LOGGED_BODY_CHARS = 1000


class LLMClient(ABC):
    """Abstract base class for LLM clients.

    Defines the interface for generating text with LLMs.
    """

    @abstractmethod
    async def generate(self, messages: list[Message]) -> GenerationResult:
        """Generate a reply to a chat exchange.

        Args:
            messages: Conversation messages.

        Returns:
            GenerationResult holding the top choice.

        Raises:
            LLMError: If generation fails.
        """
        ...

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Get the model name."""
        ...


class OpenAICompatibleClient(LLMClient):
    """LLM client for the OpenAI chat completions API.

    Any server implementing ``POST /chat/completions`` works.
    Errors are not retried.
    """

    def __init__(
        self,
        settings: OpenAISettings,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: OpenAI configuration.
            client: HTTP client (for testing).
        """
        self._settings = settings
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._settings.timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def model_name(self) -> str:
        """Get the model name."""
        return self._settings.chat_model

    async def generate(self, messages: list[Message]) -> GenerationResult:
        """Generate text using the chat completions API.

        Upstream detail is logged; the raised LLMError carries only a
        generic message.
        """
        client = await self._get_client()
        url = f"{self._settings.base_url}/chat/completions"

        payload = {
            "model": self.model_name,
            "messages": [
                {"role": msg.role.value, "content": msg.content} for msg in messages
            ],
            "temperature": self._settings.temperature,
            "max_tokens": self._settings.max_tokens,
        }

        headers = {}
        api_key = self._settings.api_key_value()
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"

        start_time = time.perf_counter()
        try:
            response = await client.post(url, json=payload, headers=headers)
            response.raise_for_status()

        except httpx.TimeoutException as e:
            track_llm_request(
                self.model_name, time.perf_counter() - start_time, success=False
            )
            logger.error(f"OpenAI API request timed out: {e}")
            raise LLMError(
                GENERATION_FAILED_MESSAGE,
                code=ErrorCode.LLM_TIMEOUT,
                details={"timeout": self._settings.timeout},
            ) from e

        except httpx.HTTPStatusError as e:
            track_llm_request(
                self.model_name, time.perf_counter() - start_time, success=False
            )
            status = e.response.status_code
            logger.error(
                f"OpenAI API error: {status}",
                extra={
                    "status_code": status,
                    "body": e.response.text[:MAX_LOGGED_BODY_CHARS],
                },
            )
            raise LLMError(
                GENERATION_FAILED_MESSAGE,
                code=ErrorCode.LLM_SERVICE_ERROR,
                details={"status_code": status},
            ) from e

        except httpx.RequestError as e:
            track_llm_request(
                self.model_name, time.perf_counter() - start_time, success=False
            )
            logger.error(f"OpenAI API connection error: {e}", extra={"url": url})
            raise LLMError(
                GENERATION_FAILED_MESSAGE,
                code=ErrorCode.LLM_SERVICE_ERROR,
                details={"url": url, "error": str(e)},
            ) from e

        duration = time.perf_counter() - start_time

        try:
            data = response.json()
            choice = data["choices"][0]
            usage = data.get("usage") or {}

            result = GenerationResult(
                content=choice["message"]["content"],
                model=data.get("model", self.model_name),
                finish_reason=choice.get("finish_reason"),
                prompt_tokens=usage.get("prompt_tokens", 0),
                completion_tokens=usage.get("completion_tokens", 0),
            )
        except (KeyError, IndexError, TypeError, ValueError) as e:
            track_llm_request(self.model_name, duration, success=False)
            logger.error(f"Invalid response from OpenAI API: {e}")
            raise LLMError(
                GENERATION_FAILED_MESSAGE,
                code=ErrorCode.LLM_SERVICE_ERROR,
                details={"error": str(e)},
            ) from e

        track_llm_request(
            self.model_name,
            duration,
            prompt_tokens=result.prompt_tokens,
            completion_tokens=result.completion_tokens,
        )
        return result
