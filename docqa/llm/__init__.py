"""LLM client module."""

from docqa.llm.client import LLMClient, OpenAICompatibleClient
from docqa.llm.models import GenerationResult, Message, Role
from docqa.llm.prompts import AnswerPromptTemplate

__all__ = [
    "AnswerPromptTemplate",
    "GenerationResult",
    "LLMClient",
    "Message",
    "OpenAICompatibleClient",
    "Role",
]
