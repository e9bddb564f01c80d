"""Retrieval data models."""

from pydantic import BaseModel, Field

from docqa.vectorstore.models import DocumentRecord, RecordMetadata


class ScoredResult(BaseModel):
    """A document chunk paired with its relevance to the current question.

    Computed per request and discarded with the response.

    Attributes:
        text: The chunk text.
        metadata: Source metadata.
        score: Cosine similarity in [-1, 1] (NaN when a vector has zero
            magnitude), or the external search engine's relevance score.
        embedding: The chunk vector, when the backend exposes it.
    """

    text: str = Field(description="Chunk text")
    metadata: RecordMetadata = Field(description="Source metadata")
    score: float = Field(description="Relevance score (higher is more relevant)")
    embedding: list[float] | None = Field(
        default=None,
        description="Chunk vector, if available",
    )

    @property
    def filename(self) -> str:
        """Source file name."""
        return self.metadata.filename

    @classmethod
    def from_record(cls, record: DocumentRecord, score: float) -> "ScoredResult":
        """Attach a score to a stored record."""
        return cls(
            text=record.text,
            metadata=record.metadata,
            score=score,
            embedding=record.embedding,
        )
