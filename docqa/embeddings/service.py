"""Embedding service interface and implementations."""

import time
from abc import ABC, abstractmethod

import httpx

from docqa.config import OpenAISettings
from docqa.embeddings.models import EmbeddingResult
from docqa.exceptions import EmbeddingError, ErrorCode
from docqa.logging_config import get_logger
from docqa.observability.metrics import track_embedding_request

logger = get_logger(__name__)

EMBEDDING_FAILED_MESSAGE = "Failed to embed question"
# Upstream error bodies are logged, cut to this length.
MAX_LOGGED_BODY_CHARS = 1000


class EmbeddingService(ABC):
    """Abstract base class for embedding services.

    Defines the interface for generating text embeddings.
    """

    @abstractmethod
    async def embed(self, text: str) -> EmbeddingResult:
        """Generate embedding for a single text.

        Args:
            text: Text to embed.

        Returns:
            EmbeddingResult with vector.

        Raises:
            EmbeddingError: If embedding fails.
        """
        ...

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Get the model name used for embeddings."""
        ...


class OpenAIEmbeddingService(EmbeddingService):
    """Embedding service using the OpenAI embeddings API.

    Works with any server that implements ``POST /embeddings``.
    """

    def __init__(
        self,
        settings: OpenAISettings,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the embedding service.

        Args:
            settings: OpenAI configuration.
            client: HTTP client. Creates new one if not provided.
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
        """Close the HTTP client if we own it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def model_name(self) -> str:
        """Get the model name."""
        return self._settings.embedding_model

    async def embed(self, text: str) -> EmbeddingResult:
        """Generate embedding for a single text.

        Args:
            text: Text to embed.

        Returns:
            EmbeddingResult with vector.

        Raises:
            EmbeddingError: If the request fails or the response is malformed.
        """
        client = await self._get_client()
        url = f"{self._settings.base_url}/embeddings"
        payload = {"model": self.model_name, "input": text}

        headers = {}
        api_key = self._settings.api_key_value()
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"

        start_time = time.perf_counter()
        try:
            response = await client.post(url, json=payload, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            track_embedding_request(
                self.model_name, time.perf_counter() - start_time, success=False
            )
            logger.error(
                f"Embedding request failed: {e.response.status_code}",
                extra={
                    "url": url,
                    "status": e.response.status_code,
                    "body": e.response.text[:MAX_LOGGED_BODY_CHARS],
                },
            )
            raise EmbeddingError(
                EMBEDDING_FAILED_MESSAGE,
                code=ErrorCode.EMBEDDING_SERVICE_ERROR,
                details={"status_code": e.response.status_code},
            ) from e
        except httpx.RequestError as e:
            track_embedding_request(
                self.model_name, time.perf_counter() - start_time, success=False
            )
            logger.error(f"Embedding request error: {e}", extra={"url": url})
            raise EmbeddingError(
                EMBEDDING_FAILED_MESSAGE,
                code=ErrorCode.EMBEDDING_SERVICE_ERROR,
                details={"url": url, "error": str(e)},
            ) from e

        track_embedding_request(self.model_name, time.perf_counter() - start_time)

        try:
            data = response.json()
            embedding = data["data"][0]["embedding"]
            return EmbeddingResult(
                text=text,
                embedding=embedding,
                model=data.get("model", self.model_name),
            )
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise EmbeddingError(
                EMBEDDING_FAILED_MESSAGE,
                code=ErrorCode.EMBEDDING_SERVICE_ERROR,
                details={"error": f"Invalid response from embedding service: {e}"},
            ) from e
