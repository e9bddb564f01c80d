"""Vector store module."""

from docqa.vectorstore.json_store import JSONVectorStore
from docqa.vectorstore.models import DocumentRecord, RecordMetadata, SearchResult
from docqa.vectorstore.qdrant_store import QdrantVectorStore

__all__ = [
    "DocumentRecord",
    "JSONVectorStore",
    "QdrantVectorStore",
    "RecordMetadata",
    "SearchResult",
]
