"""Tests for application configuration."""

import os
from pathlib import Path
from unittest.mock import patch

from pydantic import SecretStr

from docqa.config import (
    Environment,
    OpenAISettings,
    PromptSettings,
    QdrantSettings,
    Settings,
    VectorStoreBackend,
    VectorStoreSettings,
    get_settings,
)


class TestOpenAISettings:
    """Tests for OpenAI configuration."""

    def test_default_values(self) -> None:
        """Defaults target the public OpenAI API."""
        settings = OpenAISettings(api_key=None)
        assert settings.base_url == "https://api.openai.com/v1"
        assert settings.chat_model == "gpt-4o-mini"
        assert settings.embedding_model == "text-embedding-3-small"
        assert settings.temperature == 0.7
        assert settings.max_tokens == 1000
        assert settings.api_key_value() is None

    def test_api_key_from_environment(self) -> None:
        """OPENAI_API_KEY is read and masked."""
        with patch.dict(os.environ, {"OPENAI_API_KEY": "sk-secret"}):
            settings = OpenAISettings()
            assert settings.api_key is not None
            assert "sk-secret" not in str(settings.api_key)
            assert settings.api_key_value() == "sk-secret"

    def test_blank_api_key(self) -> None:
        """Blank key counts as unset."""
        assert OpenAISettings(api_key=SecretStr("   ")).api_key_value() is None

    def test_env_override(self) -> None:
        """Environment variables override defaults."""
        with patch.dict(os.environ, {"OPENAI_CHAT_MODEL": "gpt-4o"}):
            assert OpenAISettings().chat_model == "gpt-4o"


class TestVectorStoreSettings:
    """Tests for vector store configuration."""

    def test_default_values(self) -> None:
        """Default store is the JSON file written by the indexer."""
        settings = VectorStoreSettings()
        assert settings.backend == VectorStoreBackend.JSON
        assert settings.path == Path(".system/vector-data/vector_store.json")
        assert settings.top_k == 3

    def test_relative_path_resolved_from_cwd(self) -> None:
        """Relative paths are anchored at the working directory."""
        settings = VectorStoreSettings(path=Path("data/store.json"))
        assert settings.resolved_path() == Path.cwd() / "data/store.json"

    def test_absolute_path_kept(self, tmp_path: Path) -> None:
        """Absolute paths are used as-is."""
        settings = VectorStoreSettings(path=tmp_path / "store.json")
        assert settings.resolved_path() == tmp_path / "store.json"

    def test_backend_from_environment(self) -> None:
        """Backend can be switched to Qdrant."""
        with patch.dict(os.environ, {"VECTOR_STORE_BACKEND": "qdrant"}):
            assert VectorStoreSettings().backend == VectorStoreBackend.QDRANT


class TestQdrantSettings:
    """Tests for Qdrant configuration."""

    def test_default_values(self) -> None:
        """Default values for Qdrant."""
        settings = QdrantSettings()
        assert settings.url == "http://localhost:6333"
        assert settings.collection_name == "documents"


class TestPromptSettings:
    """Tests for prompt configuration."""

    def test_default_values(self) -> None:
        """Answers default to Japanese."""
        settings = PromptSettings()
        assert settings.language == "Japanese"
        assert settings.max_document_chars == 4000


class TestSettings:
    """Tests for main application settings."""

    def test_default_environment(self) -> None:
        """Default environment is development."""
        assert Settings().environment == Environment.DEVELOPMENT

    def test_nested_settings_loaded(self) -> None:
        """Nested settings are initialized."""
        settings = Settings()
        assert isinstance(settings.openai, OpenAISettings)
        assert isinstance(settings.vector_store, VectorStoreSettings)
        assert isinstance(settings.qdrant, QdrantSettings)
        assert isinstance(settings.prompt, PromptSettings)

    def test_environment_enum(self) -> None:
        """Environment can be set via string."""
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            assert Settings().environment == Environment.PRODUCTION


class TestGetSettings:
    """Tests for settings singleton."""

    def test_caching(self) -> None:
        """Settings are cached."""
        get_settings.cache_clear()
        assert get_settings() is get_settings()
