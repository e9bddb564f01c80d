"""Chat answer data models."""

from pydantic import BaseModel, Field


class SourceCitation(BaseModel):
    """A document the answer was conditioned on.

    Attributes:
        file: Source file name.
        score: Relevance score of the document.
    """

    file: str = Field(description="Source file name")
    score: float = Field(description="Relevance score")


class ChatAnswer(BaseModel):
    """Answer to a user question.

    Attributes:
        answer: Generated answer text, verbatim.
        sources: Cited documents in ranked order.
        model: LLM model used.
    """

    answer: str = Field(description="Generated answer")
    sources: list[SourceCitation] = Field(
        default_factory=list,
        description="Cited sources in ranked order",
    )
    model: str = Field(description="LLM model used")
