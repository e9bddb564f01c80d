"""Per-request question answering: retrieve, then compose."""

import time

from docqa.config import Settings, VectorStoreBackend
from docqa.embeddings.service import OpenAIEmbeddingService
from docqa.exceptions import ConfigurationError
from docqa.llm.client import OpenAICompatibleClient
from docqa.llm.prompts import AnswerPromptTemplate
from docqa.logging_config import get_logger
from docqa.observability.metrics import track_chat_query
from docqa.rag.composer import AnswerComposer
from docqa.rag.models import ChatAnswer
from docqa.retrieval.retriever import Retriever, SemanticRetriever, StoreRetriever
from docqa.vectorstore.json_store import JSONVectorStore
from docqa.vectorstore.qdrant_store import QdrantVectorStore

logger = get_logger(__name__)

API_KEY_MISSING_MESSAGE = "OpenAI API key not configured"


class ChatService:
    """Answers one question per call.

    Steps run sequentially and any failure aborts the whole answer.
    """

    def __init__(
        self,
        settings: Settings,
        retriever: Retriever,
        composer: AnswerComposer,
        resources: list[OpenAIEmbeddingService | OpenAICompatibleClient] | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            settings: Application settings.
            retriever: Document retriever.
            composer: Answer composer.
            resources: Clients to close on shutdown.
        """
        self._settings = settings
        self._retriever = retriever
        self._composer = composer
        self._resources = resources or []

    async def answer(self, question: str) -> ChatAnswer:
        """Answer a question from the document corpus.

        Raises:
            ConfigurationError: If no API key is configured.
            DocQAError: If any retrieval or generation step fails.
        """
        if not self._settings.openai.api_key_value():
            raise ConfigurationError(API_KEY_MISSING_MESSAGE)

        logger.info(
            "Processing chat query",
            extra={"question_length": len(question)},
        )

        start_time = time.perf_counter()
        try:
            results = await self._retriever.retrieve(
                question,
                top_k=self._settings.vector_store.top_k,
            )
            answer = await self._composer.compose(question, results)
        except Exception:
            track_chat_query(time.perf_counter() - start_time, success=False)
            raise

        duration = time.perf_counter() - start_time
        track_chat_query(duration)
        logger.info(
            "Chat query completed",
            extra={
                "model": answer.model,
                "sources_count": len(answer.sources),
                "duration_seconds": round(duration, 3),
            },
        )
        return answer

    async def readiness(self) -> dict[str, str]:
        """Report whether each dependency is usable."""
        checks = {
            "api_key": "ok" if self._settings.openai.api_key_value() else "missing",
        }
        try:
            checks["vector_store"] = "ok" if await self._retriever.is_ready() else "missing"
        except Exception as e:
            logger.warning(f"Vector store readiness check failed: {e}")
            checks["vector_store"] = "error"
        return checks

    async def close(self) -> None:
        """Close owned clients."""
        await self._retriever.close()
        for resource in self._resources:
            await resource.close()


def build_chat_service(settings: Settings) -> ChatService:
    """Wire a ChatService from settings.

    Args:
        settings: Application settings.

    Returns:
        ChatService using the configured search backend.
    """
    embedding_service = OpenAIEmbeddingService(settings.openai)
    llm_client = OpenAICompatibleClient(settings.openai)

    retriever: Retriever
    if settings.vector_store.backend == VectorStoreBackend.QDRANT:
        retriever = SemanticRetriever(
            embedding_service=embedding_service,
            vector_store=QdrantVectorStore(settings.qdrant),
        )
    else:
        retriever = StoreRetriever(
            embedding_service=embedding_service,
            store=JSONVectorStore(settings.vector_store.resolved_path()),
        )

    composer = AnswerComposer(
        llm_client=llm_client,
        prompt_template=AnswerPromptTemplate(settings.prompt),
    )

    return ChatService(
        settings=settings,
        retriever=retriever,
        composer=composer,
        resources=[embedding_service, llm_client],
    )
