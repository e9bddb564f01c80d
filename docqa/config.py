"""Application configuration using Pydantic Settings.

All configuration is loaded from environment variables once at startup
and passed explicitly to the components that need it.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class VectorStoreBackend(str, Enum):
    """Where document chunks are searched."""

    JSON = "json"
    QDRANT = "qdrant"


class OpenAISettings(BaseSettings):
    """OpenAI API configuration.

    Covers both the embedding and the chat-completion endpoints.
    """

    model_config = SettingsConfigDict(env_prefix="OPENAI_")

    api_key: SecretStr | None = Field(
        default=None,
        description="OpenAI API key (required to answer questions)",
    )
    base_url: str = Field(
        default="https://api.openai.com/v1",
        description="OpenAI-compatible API base URL",
    )
    chat_model: str = Field(
        default="gpt-4o-mini",
        description="Model used to generate answers",
    )
    embedding_model: str = Field(
        default="text-embedding-3-small",
        description="Model used to embed questions",
    )
    temperature: float = Field(
        default=0.7,
        description="Sampling temperature",
    )
    max_tokens: int = Field(
        default=1000,
        description="Maximum tokens in an answer",
    )
    timeout: float = Field(
        default=60.0,
        description="Request timeout in seconds",
    )

    def api_key_value(self) -> str | None:
        """Return the unmasked API key, or None if it is unset or blank."""
        if self.api_key is None:
            return None
        return self.api_key.get_secret_value().strip() or None


class VectorStoreSettings(BaseSettings):
    """Document store configuration."""

    model_config = SettingsConfigDict(env_prefix="VECTOR_STORE_")

    backend: VectorStoreBackend = Field(
        default=VectorStoreBackend.JSON,
        description="Search backend (json file or qdrant)",
    )
    path: Path = Field(
        default=Path(".system/vector-data/vector_store.json"),
        description="JSON store path, relative to the working directory",
    )
    top_k: int = Field(
        default=3,
        ge=1,
        description="Number of documents placed in the prompt",
    )

    def resolved_path(self) -> Path:
        """Return the store path anchored at the working directory."""
        if self.path.is_absolute():
            return self.path
        return Path.cwd() / self.path


class QdrantSettings(BaseSettings):
    """Qdrant vector database configuration."""

    model_config = SettingsConfigDict(env_prefix="QDRANT_")

    url: str = Field(
        default="http://localhost:6333",
        description="Qdrant server URL",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="Qdrant API key (optional for local)",
    )
    collection_name: str = Field(
        default="documents",
        description="Collection holding the indexed chunks",
    )


class PromptSettings(BaseSettings):
    """Answer prompt configuration."""

    model_config = SettingsConfigDict(env_prefix="PROMPT_")

    assistant_name: str = Field(
        default="Humanitie documentation",
        description="Corpus the assistant answers about",
    )
    language: str = Field(
        default="Japanese",
        description="Language answers are written in",
    )
    max_document_chars: int = Field(
        default=4000,
        ge=1,
        description="Per-document character limit inside the context block",
    )


class Settings(BaseSettings):
    """Main application settings.

    Aggregates all configuration sections.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application settings
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # API settings
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host",
    )
    api_port: int = Field(
        default=8000,
        description="API server port",
    )

    # Nested settings
    openai: OpenAISettings = Field(default_factory=OpenAISettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    qdrant: QdrantSettings = Field(default_factory=QdrantSettings)
    prompt: PromptSettings = Field(default_factory=PromptSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()
