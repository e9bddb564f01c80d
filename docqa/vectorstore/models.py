"""Vector store data models."""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class RecordMetadata(BaseModel):
    """Metadata stored alongside a document chunk.

    Attributes:
        filename: Name of the source file the chunk came from.
    """

    model_config = ConfigDict(extra="allow")

    filename: str = Field(description="Source file name")


class DocumentRecord(BaseModel):
    """One indexed document chunk.

    The external indexer writes the chunk text under ``document``;
    ``text`` is accepted as well.

    Attributes:
        text: The chunk text.
        embedding: The chunk's embedding vector.
        metadata: Source metadata.
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(
        validation_alias=AliasChoices("text", "document"),
        description="Chunk text",
    )
    embedding: list[float] = Field(min_length=1, description="Embedding vector")
    metadata: RecordMetadata = Field(description="Source metadata")

    @property
    def filename(self) -> str:
        """Source file name."""
        return self.metadata.filename

    @property
    def dimensions(self) -> int:
        """Embedding dimensionality."""
        return len(self.embedding)


class SearchResult(BaseModel):
    """Result from an external vector similarity search.

    Attributes:
        id: Point identifier.
        score: Similarity score (higher is more similar).
        payload: Stored metadata.
    """

    id: str = Field(description="Point identifier")
    score: float = Field(description="Similarity score")
    payload: dict[str, Any] = Field(
        default_factory=dict,
        description="Point payload",
    )
