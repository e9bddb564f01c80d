"""Tests for cosine-similarity ranking."""

import math

import pytest

from docqa.exceptions import DimensionMismatchError, ErrorCode
from docqa.retrieval.ranker import cosine_similarity, rank
from docqa.vectorstore.models import DocumentRecord, RecordMetadata


def _record(name: str, embedding: list[float]) -> DocumentRecord:
    return DocumentRecord(
        text=f"text of {name}",
        embedding=embedding,
        metadata=RecordMetadata(filename=name),
    )


class TestCosineSimilarity:
    """Tests for cosine_similarity."""

    def test_identical_vectors(self) -> None:
        """Identical non-zero vectors score 1."""
        assert cosine_similarity([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]) == pytest.approx(1.0)

    def test_orthogonal_vectors(self) -> None:
        """Orthogonal vectors score 0."""
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_opposite_vectors(self) -> None:
        """Opposite vectors score -1."""
        assert cosine_similarity([1.0, -2.0, 0.5], [-1.0, 2.0, -0.5]) == pytest.approx(
            -1.0
        )

    def test_scale_invariant(self) -> None:
        """Scaling either vector does not change the score."""
        a = [0.3, 0.7, 0.1]
        b = [0.9, 0.2, 0.4]
        assert cosine_similarity([x * 25 for x in a], b) == pytest.approx(
            cosine_similarity(a, b)
        )

    def test_zero_vector_is_nan(self) -> None:
        """A zero-magnitude vector yields NaN instead of raising."""
        assert math.isnan(cosine_similarity([0.0, 0.0], [1.0, 2.0]))
        assert math.isnan(cosine_similarity([1.0, 2.0], [0.0, 0.0]))

    def test_dimension_mismatch_raises(self) -> None:
        """Vectors of different length are rejected."""
        with pytest.raises(DimensionMismatchError) as exc_info:
            cosine_similarity([1.0, 0.0, 0.0], [1.0, 0.0])

        assert exc_info.value.code == ErrorCode.EMBEDDING_DIMENSION_MISMATCH
        assert exc_info.value.expected == 3
        assert exc_info.value.actual == 2


class TestRank:
    """Tests for rank."""

    def _store(self) -> list[DocumentRecord]:
        return [
            _record("a.md", [1.0, 0.0]),
            _record("b.md", [0.0, 1.0]),
            _record("c.md", [0.7, 0.7]),
            _record("d.md", [-1.0, 0.0]),
            _record("e.md", [0.9, 0.1]),
        ]

    def test_returns_top_k_sorted(self) -> None:
        """Five records and K=3 give three results, best first."""
        results = rank([1.0, 0.0], self._store(), top_k=3)

        assert len(results) == 3
        assert [r.filename for r in results] == ["a.md", "e.md", "c.md"]
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)

    def test_fewer_records_than_k(self) -> None:
        """Two records and K=3 give both records."""
        results = rank([1.0, 0.0], self._store()[:2], top_k=3)
        assert len(results) == 2

    def test_empty_store(self) -> None:
        """No records give no results."""
        assert rank([1.0, 0.0], [], top_k=3) == []

    def test_invariant_under_query_scaling(self) -> None:
        """Positive scaling of the query leaves the order unchanged."""
        store = self._store()
        base = [r.filename for r in rank([0.6, 0.2], store, top_k=5)]
        scaled = [r.filename for r in rank([60.0, 20.0], store, top_k=5)]
        assert base == scaled

    def test_results_carry_record_fields(self) -> None:
        """Results keep the record text, metadata and vector."""
        result = rank([1.0, 0.0], [_record("a.md", [2.0, 0.0])], top_k=1)[0]

        assert result.text == "text of a.md"
        assert result.filename == "a.md"
        assert result.embedding == [2.0, 0.0]
        assert result.score == pytest.approx(1.0)

    def test_nan_scores_sort_last(self) -> None:
        """Zero vectors rank below every real score."""
        store = [
            _record("zero.md", [0.0, 0.0]),
            _record("opposite.md", [-1.0, 0.0]),
        ]
        results = rank([1.0, 0.0], store, top_k=2)

        assert results[0].filename == "opposite.md"
        assert math.isnan(results[1].score)

    def test_ties_keep_store_order(self) -> None:
        """Equal scores keep the order they had in the store."""
        store = [_record("first.md", [1.0, 0.0]), _record("second.md", [2.0, 0.0])]
        results = rank([1.0, 0.0], store, top_k=2)
        assert [r.filename for r in results] == ["first.md", "second.md"]

    def test_dimension_mismatch_raises(self) -> None:
        """A record of the wrong size fails the whole ranking."""
        with pytest.raises(DimensionMismatchError):
            rank([1.0, 0.0, 0.0], self._store(), top_k=3)

    def test_invalid_top_k(self) -> None:
        """top_k below 1 is rejected."""
        with pytest.raises(ValueError):
            rank([1.0, 0.0], self._store(), top_k=0)
