"""Embedding service module."""

from docqa.embeddings.models import EmbeddingResult
from docqa.embeddings.service import EmbeddingService, OpenAIEmbeddingService

__all__ = [
    "EmbeddingResult",
    "EmbeddingService",
    "OpenAIEmbeddingService",
]
