"""Answer composition and the chat service."""

from docqa.rag.composer import AnswerComposer
from docqa.rag.models import ChatAnswer, SourceCitation
from docqa.rag.service import ChatService, build_chat_service

__all__ = [
    "AnswerComposer",
    "ChatAnswer",
    "ChatService",
    "SourceCitation",
    "build_chat_service",
]
