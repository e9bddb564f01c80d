"""Retrieval module: similarity ranking and retrievers."""

from docqa.retrieval.models import ScoredResult
from docqa.retrieval.ranker import cosine_similarity, rank
from docqa.retrieval.retriever import Retriever, SemanticRetriever, StoreRetriever

__all__ = [
    "Retriever",
    "ScoredResult",
    "SemanticRetriever",
    "StoreRetriever",
    "cosine_similarity",
    "rank",
]
