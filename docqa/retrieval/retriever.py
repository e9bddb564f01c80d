"""Retriever interface and implementations."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from docqa.embeddings.service import EmbeddingService
from docqa.exceptions import ErrorCode, RetrievalError
from docqa.logging_config import get_logger
from docqa.observability.metrics import track_retrieval_request
from docqa.retrieval.models import ScoredResult
from docqa.retrieval.ranker import DEFAULT_TOP_K, rank
from docqa.vectorstore.json_store import JSONVectorStore
from docqa.vectorstore.models import RecordMetadata, SearchResult
from docqa.vectorstore.qdrant_store import QdrantVectorStore

logger = get_logger(__name__)


class Retriever(ABC):
    """Abstract base class for retrievers.

    Defines the interface for retrieving relevant documents.
    """

    @abstractmethod
    async def retrieve(
        self,
        query: str,
        top_k: int = DEFAULT_TOP_K,
    ) -> list[ScoredResult]:
        """Retrieve relevant documents for a query.

        Args:
            query: The user question.
            top_k: Maximum number of results to return.

        Returns:
            Results ordered by relevance, best first.
        """
        ...

    async def is_ready(self) -> bool:
        """Whether the backing store is available."""
        return True

    async def close(self) -> None:
        """Release any held resources."""


def _record_metrics(results: list[ScoredResult]) -> None:
    track_retrieval_request(
        results_returned=len(results),
        top_score=results[0].score if results else None,
    )


class StoreRetriever(Retriever):
    """Ranks every record of a JSON vector store against the query.

    The store is read fresh on each call. A missing store is reported
    before the embedding service is called.
    """

    def __init__(
        self,
        embedding_service: EmbeddingService,
        store: JSONVectorStore,
    ) -> None:
        self._embedding_service = embedding_service
        self._store = store

    async def retrieve(
        self,
        query: str,
        top_k: int = DEFAULT_TOP_K,
    ) -> list[ScoredResult]:
        """Load the store, embed the query and rank all records.

        Raises:
            VectorStoreError: If the store is missing or invalid.
            EmbeddingError: If the query cannot be embedded, or its
                dimensionality differs from the store's.
        """
        records = self._store.load()
        embedding_result = await self._embedding_service.embed(query)
        results = rank(embedding_result.embedding, records, top_k=top_k)

        logger.debug(
            f"Ranked {len(records)} records",
            extra={"top_k": top_k, "results_count": len(results)},
        )
        _record_metrics(results)
        return results

    async def is_ready(self) -> bool:
        return self._store.exists()


class SemanticRetriever(Retriever):
    """Delegates nearest-neighbour search to a Qdrant collection.

    Point payloads hold the chunk text under ``document`` (or ``text``)
    and the source name under ``metadata.filename`` (or ``filename``).
    """

    def __init__(
        self,
        embedding_service: EmbeddingService,
        vector_store: QdrantVectorStore,
    ) -> None:
        """Initialize the semantic retriever.

        Args:
            embedding_service: Service for generating embeddings.
            vector_store: Vector database for similarity search.
        """
        self._embedding_service = embedding_service
        self._vector_store = vector_store

    async def retrieve(
        self,
        query: str,
        top_k: int = DEFAULT_TOP_K,
    ) -> list[ScoredResult]:
        """Embed the query and search the collection.

        Raises:
            EmbeddingError: If the query cannot be embedded.
            VectorStoreError: If the search fails.
            RetrievalError: If a returned payload lacks text or file name.
        """
        embedding_result = await self._embedding_service.embed(query)
        search_results = await self._vector_store.search(
            vector=embedding_result.embedding,
            limit=top_k,
        )

        results = [self._to_scored_result(sr) for sr in search_results]

        logger.debug(
            f"Retrieved {len(results)} results from Qdrant",
            extra={"top_k": top_k, "results_count": len(results)},
        )
        _record_metrics(results)
        return results

    def _to_scored_result(self, search_result: SearchResult) -> ScoredResult:
        payload = search_result.payload
        text = payload.get("document", payload.get("text"))
        metadata: dict[str, Any] = dict(payload.get("metadata") or {})
        if "filename" not in metadata and "filename" in payload:
            metadata["filename"] = payload["filename"]

        try:
            return ScoredResult(
                text=text,
                metadata=RecordMetadata.model_validate(metadata),
                score=search_result.score,
            )
        except PydanticValidationError as e:
            raise RetrievalError(
                f"Invalid payload for point {search_result.id}",
                code=ErrorCode.RETRIEVAL_ERROR,
                details={"id": search_result.id, "errors": e.errors(include_url=False)},
            ) from e

    async def is_ready(self) -> bool:
        return await self._vector_store.collection_exists()

    async def close(self) -> None:
        await self._vector_store.close()
