"""Prompt template for grounded answers."""

from collections.abc import Sequence

from docqa.config import PromptSettings
from docqa.retrieval.models import ScoredResult


class AnswerPromptTemplate:
    """Builds the system prompt that carries the retrieved documents.

    The question itself is sent separately as the user message.
    """

    DEFAULT_SYSTEM_TEMPLATE = """You are an assistant for the {assistant_name}.
Answer the user's question using the information retrieved from the documents below.

Document contents:
{context}

Rules for answering:
- Answer accurately, based only on the document contents
- If the documents do not cover the question, say plainly that the documents contain no information about it
- Answer concisely and clearly in {language}
- Cite document names when helpful"""

    DOCUMENT_TEMPLATE = "[Document {index}: {filename}]\n{text}"
    SEPARATOR = "\n\n---\n\n"

    def __init__(
        self,
        settings: PromptSettings | None = None,
        system_template: str | None = None,
    ) -> None:
        """Initialize the template.

        Args:
            settings: Prompt configuration.
            system_template: Custom system template. Must contain
                ``{context}``; may use ``{assistant_name}`` and ``{language}``.
        """
        self._settings = settings or PromptSettings()
        self.system_template = system_template or self.DEFAULT_SYSTEM_TEMPLATE

    def format_context(self, results: Sequence[ScoredResult]) -> str:
        """Render ranked documents into one context block.

        Each document is labelled with its 1-based rank and source file
        name. Over-long texts are cut to the configured limit.
        """
        limit = self._settings.max_document_chars
        return self.SEPARATOR.join(
            self.DOCUMENT_TEMPLATE.format(
                index=i,
                filename=result.filename,
                text=result.text[:limit],
            )
            for i, result in enumerate(results, start=1)
        )

    def build_system_prompt(self, results: Sequence[ScoredResult]) -> str:
        """Build the complete system prompt for a set of ranked documents."""
        return self.system_template.format(
            assistant_name=self._settings.assistant_name,
            language=self._settings.language,
            context=self.format_context(results),
        )
