"""Embedding data models."""

from pydantic import BaseModel, Field


class EmbeddingResult(BaseModel):
    """Result of an embedding operation.

    Attributes:
        text: The original text that was embedded.
        embedding: The embedding vector.
        model: The model used to generate the embedding.
    """

    text: str = Field(description="Original text")
    embedding: list[float] = Field(min_length=1, description="Embedding vector")
    model: str = Field(description="Model used for embedding")

    @property
    def dimensions(self) -> int:
        """Vector dimensions."""
        return len(self.embedding)
