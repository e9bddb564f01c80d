"""Cosine-similarity ranking over an in-memory list of records.

A linear scan: every record is scored against the query and the best
``top_k`` are kept. There is no index.
"""

import math
from collections.abc import Iterable, Sequence

from docqa.exceptions import DimensionMismatchError
from docqa.retrieval.models import ScoredResult
from docqa.vectorstore.models import DocumentRecord

DEFAULT_TOP_K = 3


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of the angle between two vectors.

    Args:
        a: First vector.
        b: Second vector, same length as ``a``.

    Returns:
        Similarity in [-1, 1], or NaN if either vector has zero magnitude.

    Raises:
        DimensionMismatchError: If the vectors differ in length.
    """
    if len(a) != len(b):
        raise DimensionMismatchError(expected=len(a), actual=len(b))

    dot = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for x, y in zip(a, b):
        dot += x * y
        norm_a += x * x
        norm_b += y * y

    denominator = math.sqrt(norm_a) * math.sqrt(norm_b)
    if denominator == 0.0:
        return math.nan

    # Rounding can push parallel vectors a hair past 1.
    return max(-1.0, min(1.0, dot / denominator))


def _sort_key(result: ScoredResult) -> tuple[bool, float]:
    # NaN never compares, so it goes last explicitly.
    if math.isnan(result.score):
        return (True, 0.0)
    return (False, -result.score)


def rank(
    query: Sequence[float],
    records: Iterable[DocumentRecord],
    top_k: int = DEFAULT_TOP_K,
) -> list[ScoredResult]:
    """Score records against a query vector and keep the best ones.

    Equal scores keep their store order.

    Args:
        query: Query embedding.
        records: Candidate records, all with the query's dimensionality.
        top_k: Maximum number of results.

    Returns:
        At most ``top_k`` results, highest score first.

    Raises:
        ValueError: If ``top_k`` is less than 1.
        DimensionMismatchError: If a record's embedding differs in length
            from the query.
    """
    if top_k < 1:
        raise ValueError(f"top_k must be at least 1, got {top_k}")

    scored = [
        ScoredResult.from_record(record, cosine_similarity(query, record.embedding))
        for record in records
    ]
    scored.sort(key=_sort_key)
    return scored[:top_k]
