"""API routes for document Q&A."""

import math

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from docqa.exceptions import DocQAError, ValidationError
from docqa.logging_config import get_logger
from docqa.rag.models import ChatAnswer
from docqa.rag.service import ChatService

logger = get_logger(__name__)

MESSAGE_REQUIRED = "Message is required"
INTERNAL_ERROR_MESSAGE = "Internal server error"

router = APIRouter(prefix="/api", tags=["Chat"])


class ChatRequest(BaseModel):
    """Request body for a chat question."""

    message: str | None = Field(default=None, description="User question")


class SourceResponse(BaseModel):
    """A cited source."""

    file: str = Field(description="Source file name")
    score: float | None = Field(description="Relevance score (null if undefined)")


class ChatResponse(BaseModel):
    """Response to a chat question."""

    answer: str = Field(description="Generated answer")
    sources: list[SourceResponse] = Field(description="Cited sources in ranked order")


def get_chat_service(request: Request) -> ChatService:
    """Chat service wired at startup."""
    return request.app.state.chat_service


@router.post("/chat", response_model=ChatResponse)
async def chat_endpoint(
    payload: ChatRequest | None = None,
    service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """Answer a question about the document corpus."""
    if payload is None or not payload.message:
        raise ValidationError(MESSAGE_REQUIRED)

    try:
        answer = await service.answer(payload.message)
    except DocQAError:
        raise
    except Exception as e:
        logger.exception("Chat API error")
        raise DocQAError(INTERNAL_ERROR_MESSAGE, details={"error": str(e)}) from e

    return chat_answer_to_response(answer)


def chat_answer_to_response(answer: ChatAnswer) -> ChatResponse:
    """Convert an internal ChatAnswer to the API response.

    NaN scores have no JSON form and are sent as null.
    """
    return ChatResponse(
        answer=answer.answer,
        sources=[
            SourceResponse(
                file=source.file,
                score=None if math.isnan(source.score) else source.score,
            )
            for source in answer.sources
        ],
    )
