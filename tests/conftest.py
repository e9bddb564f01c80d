"""Pytest configuration and shared fixtures."""

import json
from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr

from docqa.api.app import create_app
from docqa.config import OpenAISettings, PromptSettings, Settings, VectorStoreSettings
from docqa.embeddings.service import OpenAIEmbeddingService
from docqa.llm.client import OpenAICompatibleClient
from docqa.llm.prompts import AnswerPromptTemplate
from docqa.rag.composer import AnswerComposer
from docqa.rag.service import ChatService
from docqa.retrieval.retriever import StoreRetriever
from docqa.vectorstore.json_store import JSONVectorStore

QUERY_VECTOR = [1.0, 0.0, 0.0]

STORE_RECORDS: list[dict[str, Any]] = [
    {
        "document": "Expense reports are due on the 5th.",
        "embedding": [0.9, 0.1, 0.0],
        "metadata": {"filename": "expenses.md"},
    },
    {
        "document": "The office opens at 9am.",
        "embedding": [0.0, 1.0, 0.0],
        "metadata": {"filename": "office.md"},
    },
    {
        "document": "Travel must be booked through the portal.",
        "embedding": [0.5, 0.5, 0.0],
        "metadata": {"filename": "travel.md"},
    },
    {
        "document": "Holidays follow the national calendar.",
        "embedding": [-1.0, 0.0, 0.0],
        "metadata": {"filename": "holidays.md"},
    },
    {
        "document": "Badges are issued at reception.",
        "embedding": [0.2, 0.0, 0.9],
        "metadata": {"filename": "badges.md"},
    },
]


def write_store(path: Path, records: list[dict[str, Any]]) -> Path:
    """Write records to a JSON vector store file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


def make_settings(
    store_path: Path,
    api_key: str | None = "sk-test",
) -> Settings:
    """Settings pointing at a local store, independent of the environment."""
    return Settings(
        openai=OpenAISettings(
            api_key=SecretStr(api_key) if api_key is not None else None,
            base_url="http://openai.test/v1",
        ),
        vector_store=VectorStoreSettings(path=store_path, top_k=3),
        prompt=PromptSettings(),
    )


def make_chat_service(
    settings: Settings,
    handler: Callable[[httpx.Request], httpx.Response],
) -> ChatService:
    """Chat service whose OpenAI calls are served by ``handler``."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    embedding_service = OpenAIEmbeddingService(settings.openai, client=http_client)
    llm_client = OpenAICompatibleClient(settings.openai, client=http_client)
    return ChatService(
        settings=settings,
        retriever=StoreRetriever(
            embedding_service=embedding_service,
            store=JSONVectorStore(settings.vector_store.path),
        ),
        composer=AnswerComposer(
            llm_client=llm_client,
            prompt_template=AnswerPromptTemplate(settings.prompt),
        ),
    )


def openai_handler(
    answer: str = "Reports are due on the 5th.",
    chat_status: int = 200,
    chat_body: str | None = None,
) -> Callable[[httpx.Request], httpx.Response]:
    """Fake OpenAI API: fixed embedding, fixed chat reply or error."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/embeddings"):
            return httpx.Response(
                200,
                json={
                    "data": [{"embedding": QUERY_VECTOR, "index": 0}],
                    "model": "text-embedding-3-small",
                },
            )
        if chat_status != 200:
            return httpx.Response(chat_status, text=chat_body or "error")
        return httpx.Response(
            200,
            json={
                "model": "gpt-4o-mini",
                "choices": [
                    {
                        "index": 0,
                        "message": {"role": "assistant", "content": answer},
                        "finish_reason": "stop",
                    }
                ],
                "usage": {"prompt_tokens": 120, "completion_tokens": 12},
            },
        )

    return handler


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    """Populated vector store file."""
    return write_store(tmp_path / "vector_store.json", STORE_RECORDS)


@pytest.fixture
def settings(store_path: Path) -> Settings:
    """Settings with an API key and a populated store."""
    return make_settings(store_path)


@pytest.fixture
async def client(settings: Settings) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client for a fully wired app.

    Yields:
        AsyncClient whose OpenAI calls hit a fake handler.
    """
    app = create_app(settings, make_chat_service(settings, openai_handler()))
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
