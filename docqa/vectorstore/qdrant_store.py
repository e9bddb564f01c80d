"""Read-only search over a Qdrant collection.

Used when document storage is delegated to an external vector database.
Collections are built and maintained by the indexer, not by this service.
"""

from qdrant_client import AsyncQdrantClient

from docqa.config import QdrantSettings
from docqa.exceptions import ErrorCode, VectorStoreError
from docqa.logging_config import get_logger
from docqa.vectorstore.models import SearchResult

logger = get_logger(__name__)

SEARCH_FAILED_MESSAGE = "Failed to search vector store"
COLLECTION_CHECK_FAILED_MESSAGE = "Failed to check vector store collection"


class QdrantVectorStore:
    """Qdrant-backed nearest-neighbour search."""

    def __init__(
        self,
        settings: QdrantSettings,
        client: AsyncQdrantClient | None = None,
    ) -> None:
        """Initialize Qdrant vector store.

        Args:
            settings: Qdrant configuration.
            client: Existing client (for testing).
        """
        self._settings = settings
        self._client = client
        self._owns_client = client is None

    @property
    def collection(self) -> str:
        """Name of the searched collection."""
        return self._settings.collection_name

    async def _get_client(self) -> AsyncQdrantClient:
        """Get or create Qdrant client."""
        if self._client is None:
            api_key = None
            if self._settings.api_key:
                api_key = self._settings.api_key.get_secret_value()

            self._client = AsyncQdrantClient(
                url=self._settings.url,
                api_key=api_key,
            )
        return self._client

    async def close(self) -> None:
        """Close the Qdrant client."""
        if self._owns_client and self._client is not None:
            await self._client.close()
            self._client = None

    async def collection_exists(self) -> bool:
        """Check if the configured collection exists."""
        client = await self._get_client()
        try:
            return await client.collection_exists(self.collection)
        except Exception as e:
            raise VectorStoreError(
                COLLECTION_CHECK_FAILED_MESSAGE,
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": self.collection, "error": str(e)},
            ) from e

    async def search(
        self,
        vector: list[float],
        limit: int = 3,
    ) -> list[SearchResult]:
        """Search the collection for the nearest vectors.

        Args:
            vector: Query vector.
            limit: Maximum results to return.

        Returns:
            Results ordered by descending score.

        Raises:
            VectorStoreError: If the search fails.
        """
        client = await self._get_client()

        try:
            results = await client.query_points(
                collection_name=self.collection,
                query=vector,
                limit=limit,
                with_payload=True,
            )
        except Exception as e:
            raise VectorStoreError(
                SEARCH_FAILED_MESSAGE,
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": self.collection, "error": str(e)},
            ) from e

        logger.debug(
            f"Qdrant returned {len(results.points)} points",
            extra={"collection": self.collection, "limit": limit},
        )

        return [
            SearchResult(
                id=str(point.id),
                score=point.score if point.score is not None else 0.0,
                payload=dict(point.payload) if point.payload else {},
            )
            for point in results.points
        ]
