"""Turns ranked documents and a question into an answer."""

from collections.abc import Sequence

from docqa.llm.client import LLMClient
from docqa.llm.models import Message
from docqa.llm.prompts import AnswerPromptTemplate
from docqa.logging_config import get_logger
from docqa.rag.models import ChatAnswer, SourceCitation
from docqa.retrieval.models import ScoredResult

logger = get_logger(__name__)


class AnswerComposer:
    """Builds the grounded prompt and delegates generation to an LLM."""

    def __init__(
        self,
        llm_client: LLMClient,
        prompt_template: AnswerPromptTemplate | None = None,
    ) -> None:
        """Initialize the composer.

        Args:
            llm_client: LLM client for generation.
            prompt_template: Template for the system prompt.
        """
        self._llm_client = llm_client
        self._prompt_template = prompt_template or AnswerPromptTemplate()

    async def compose(
        self,
        question: str,
        results: Sequence[ScoredResult],
    ) -> ChatAnswer:
        """Answer a question from the supplied documents.

        Args:
            question: The user question, sent as-is.
            results: Ranked documents, best first.

        Returns:
            The top generated text and the cited sources, in the order given.

        Raises:
            LLMError: If the generation service fails.
        """
        messages = [
            Message.system(self._prompt_template.build_system_prompt(results)),
            Message.user(question),
        ]

        generation = await self._llm_client.generate(messages)

        logger.info(
            "Answer generated",
            extra={
                "sources_count": len(results),
                "tokens_used": generation.total_tokens,
            },
        )

        return ChatAnswer(
            answer=generation.content,
            sources=[
                SourceCitation(file=result.filename, score=result.score)
                for result in results
            ],
            model=generation.model,
        )
