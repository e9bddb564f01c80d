"""LLM data models."""

from enum import Enum

from pydantic import BaseModel, Field


class Role(str, Enum):
    """Message role in a chat exchange."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A message in a chat exchange.

    Attributes:
        role: The role of the message sender.
        content: The message content.
    """

    role: Role = Field(description="Message role")
    content: str = Field(description="Message content")

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role=Role.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=Role.USER, content=content)


class GenerationResult(BaseModel):
    """The top choice of a chat completion.

    Attributes:
        content: The generated text, verbatim.
        model: Model that produced it.
        finish_reason: Why generation stopped, if reported.
        prompt_tokens: Number of tokens in the prompt.
        completion_tokens: Number of tokens in the completion.
    """

    content: str = Field(description="Generated text")
    model: str = Field(description="Model used")
    finish_reason: str | None = Field(default=None, description="Stop reason")
    prompt_tokens: int = Field(default=0, description="Prompt token count")
    completion_tokens: int = Field(default=0, description="Completion token count")

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens
